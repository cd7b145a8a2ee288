"""Application services for video records and uploads."""

from src.application.services.errors import (
    ClassificationError,
    InvalidFormError,
    MissingFileError,
    PayloadTooLargeError,
    PersistenceError,
    RenameError,
    StagingIOError,
    TranscodeError,
    UnsupportedMediaTypeError,
    UploadError,
    VideoUploadError,
)
from src.application.services.storage import VideoStorageService
from src.application.services.upload import VideoUploadService

__all__ = [
    "VideoStorageService",
    "VideoUploadService",
    # Errors
    "VideoUploadError",
    "PayloadTooLargeError",
    "MissingFileError",
    "InvalidFormError",
    "UnsupportedMediaTypeError",
    "StagingIOError",
    "ClassificationError",
    "TranscodeError",
    "RenameError",
    "UploadError",
    "PersistenceError",
]
