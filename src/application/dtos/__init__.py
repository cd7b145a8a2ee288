"""Data Transfer Objects for application layer."""

from src.application.dtos.upload import (
    VIDEO_MEDIA_TYPE,
    CreateVideoRequest,
    ProcessingStep,
    VideoUpload,
)

__all__ = [
    "VIDEO_MEDIA_TYPE",
    "CreateVideoRequest",
    "ProcessingStep",
    "VideoUpload",
]
