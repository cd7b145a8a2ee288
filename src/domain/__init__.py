"""Domain layer - business models and logic."""

from src.domain.exceptions import (
    DomainException,
    ForbiddenException,
    InvalidVideoIdException,
    VideoNotFoundException,
)
from src.domain.models import Video
from src.domain.value_objects import (
    AspectRatio,
    AspectRatioLabels,
    classify_dimensions,
    generate_storage_key,
)

__all__ = [
    # Exceptions
    "DomainException",
    "InvalidVideoIdException",
    "VideoNotFoundException",
    "ForbiddenException",
    # Models
    "Video",
    # Value Objects
    "AspectRatio",
    "AspectRatioLabels",
    "classify_dimensions",
    "generate_storage_key",
]
