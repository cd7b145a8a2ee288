"""Object storage interface used by the upload pipeline."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


@dataclass
class BlobMetadata:
    """What object storage reports back after a put."""

    bucket: str
    key: str
    size_bytes: int
    content_type: str
    etag: str


@dataclass
class HealthStatus:
    """Result of a backing-service health probe."""

    healthy: bool
    latency_ms: float
    message: str | None = None
    details: dict[str, str] | None = None


class BlobStorageBase(ABC):
    """S3-compatible object storage.

    Objects are written once under a caller-chosen key and never read back
    through this interface; clients fetch them from the public object URL.
    """

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        key: str,
        data: BinaryIO | bytes,
        content_type: str = "application/octet-stream",
    ) -> BlobMetadata:
        """Store ``data`` as a single object.

        Args:
            bucket: Target bucket name.
            key: Object key, including any prefix.
            data: Open binary file or raw bytes.
            content_type: Content-Type recorded on the object.

        Returns:
            Metadata reported by the store.
        """

    @abstractmethod
    async def create_bucket(self, bucket: str) -> bool:
        """Create ``bucket``; returns False if it was already there."""

    @abstractmethod
    async def bucket_exists(self, bucket: str) -> bool:
        """Check if a bucket exists."""

    @abstractmethod
    async def health_check(self) -> HealthStatus: ...
