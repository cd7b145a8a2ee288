"""DTOs for video upload operations."""

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO

from pydantic import BaseModel, Field

VIDEO_MEDIA_TYPE = "video/mp4"


class ProcessingStep(str, Enum):
    """Individual steps in the video upload pipeline."""

    VALIDATING = "validating"
    STAGING = "staging"
    CLASSIFYING = "classifying"
    TRANSCODING = "transcoding"
    FINALIZING = "finalizing"
    UPLOADING = "uploading"
    PERSISTING = "persisting"


@dataclass
class VideoUpload:
    """An uploaded video part as received from the multipart form."""

    file: BinaryIO
    content_type: str | None
    filename: str | None = None

    @property
    def media_type(self) -> str:
        """Declared content type without parameters, lower-cased."""
        if not self.content_type:
            return ""
        return self.content_type.split(";", 1)[0].strip().lower()


class CreateVideoRequest(BaseModel):
    """Request to create a draft video record."""

    title: str = Field(min_length=1, max_length=256, description="Video title")
    description: str = Field(
        default="",
        max_length=5000,
        description="Video description",
    )
