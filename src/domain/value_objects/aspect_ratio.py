"""Aspect ratio classification of video dimensions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Inclusive ratio bands (width / height)
LANDSCAPE_RANGE = (1.7, 1.8)
PORTRAIT_RANGE = (0.5, 0.6)


class AspectRatio(str, Enum):
    """Coarse orientation of a video."""

    LANDSCAPE = "landscape"  # ~16:9
    PORTRAIT = "portrait"  # ~9:16
    OTHER = "other"


def classify_ratio(ratio: float) -> AspectRatio:
    """Bucket a width/height ratio into an AspectRatio."""
    if LANDSCAPE_RANGE[0] <= ratio <= LANDSCAPE_RANGE[1]:
        return AspectRatio.LANDSCAPE
    if PORTRAIT_RANGE[0] <= ratio <= PORTRAIT_RANGE[1]:
        return AspectRatio.PORTRAIT
    return AspectRatio.OTHER


def classify_dimensions(width: int, height: int) -> AspectRatio:
    """Classify a stream by its pixel dimensions.

    A non-positive height has no meaningful ratio and is classified as OTHER.

    Examples:
        >>> classify_dimensions(1920, 1080)
        <AspectRatio.LANDSCAPE: 'landscape'>
        >>> classify_dimensions(1080, 1920)
        <AspectRatio.PORTRAIT: 'portrait'>
    """
    if height <= 0:
        return AspectRatio.OTHER
    return classify_ratio(width / height)


class AspectRatioLabels(BaseModel):
    """Mapping from AspectRatio to the label used in storage keys."""

    model_config = ConfigDict(frozen=True)

    landscape: str = Field(min_length=1)
    portrait: str = Field(min_length=1)
    other: str = Field(min_length=1)

    def label_for(self, aspect_ratio: AspectRatio) -> str:
        """Get the label for an aspect ratio."""
        return str(getattr(self, aspect_ratio.value))

    @classmethod
    def preset(cls, name: str) -> "AspectRatioLabels":
        """Look up a named label convention ('orientation' or 'ratio').

        Raises:
            ValueError: If the preset name is unknown.
        """
        try:
            return LABEL_PRESETS[name]
        except KeyError:
            msg = f"Unknown aspect ratio label preset: {name!r}"
            raise ValueError(msg) from None


LABEL_PRESETS: dict[str, AspectRatioLabels] = {
    "orientation": AspectRatioLabels(
        landscape="landscape",
        portrait="portrait",
        other="other",
    ),
    "ratio": AspectRatioLabels(
        landscape="16:9",
        portrait="9:16",
        other="other",
    ),
}
