"""Application layer - use cases and orchestration.

This layer contains:
- Services: video record gateway and the upload pipeline
- DTOs: Data transfer objects for API boundaries
"""

from src.application.dtos import (
    VIDEO_MEDIA_TYPE,
    CreateVideoRequest,
    ProcessingStep,
    VideoUpload,
)
from src.application.services import (
    VideoStorageService,
    VideoUploadError,
    VideoUploadService,
)

__all__ = [
    # DTOs
    "VIDEO_MEDIA_TYPE",
    "CreateVideoRequest",
    "ProcessingStep",
    "VideoUpload",
    # Services
    "VideoStorageService",
    "VideoUploadError",
    "VideoUploadService",
]
