"""Blob storage abstractions and implementations."""

from src.commons.infrastructure.blob.base import (
    BlobMetadata,
    BlobStorageBase,
    HealthStatus,
)
from src.commons.infrastructure.blob.minio_provider import MinioBlobStorage
from src.commons.infrastructure.blob.urls import build_object_url

__all__ = [
    # Base classes
    "BlobMetadata",
    "BlobStorageBase",
    "HealthStatus",
    # Implementations
    "MinioBlobStorage",
    # URLs
    "build_object_url",
]
