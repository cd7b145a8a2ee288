"""Domain value objects."""

from src.domain.value_objects.aspect_ratio import (
    LABEL_PRESETS,
    AspectRatio,
    AspectRatioLabels,
    classify_dimensions,
    classify_ratio,
)
from src.domain.value_objects.storage_key import generate_storage_key

__all__ = [
    "AspectRatio",
    "AspectRatioLabels",
    "LABEL_PRESETS",
    "classify_dimensions",
    "classify_ratio",
    "generate_storage_key",
]
