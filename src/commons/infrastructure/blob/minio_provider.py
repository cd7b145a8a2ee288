"""MinIO client implementation of object storage."""

import asyncio
import functools
import io
import os
import time
from typing import BinaryIO

from minio import Minio
from minio.error import S3Error

from src.commons.infrastructure.blob.base import (
    BlobMetadata,
    BlobStorageBase,
    HealthStatus,
)
from src.commons.telemetry import get_logger

# minio splits anything larger into a multipart upload
MULTIPART_PART_SIZE = 16 * 1024 * 1024


def _stream_length(data: BinaryIO) -> int:
    """Bytes from the current position to the end of ``data``."""
    try:
        return os.fstat(data.fileno()).st_size - data.tell()
    except (AttributeError, OSError, io.UnsupportedOperation):
        start = data.tell()
        end = data.seek(0, io.SEEK_END)
        data.seek(start)
        return end - start


class MinioBlobStorage(BlobStorageBase):
    """S3-compatible storage through the MinIO SDK.

    The same client talks to AWS S3 in production and to a MinIO container
    locally; only the endpoint and credentials differ. SDK calls block, so
    each one runs in the default executor.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        secure: bool = True,
        region: str | None = None,
    ) -> None:
        """Initialize the MinIO client.

        Args:
            endpoint: Host and optional port, e.g. "s3.amazonaws.com" or
                "localhost:9000".
            access_key: Access key ID.
            secret_key: Secret access key.
            secure: Use HTTPS.
            region: Region of the buckets; skips a location lookup when set.
        """
        self._client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
            region=region,
        )
        self._endpoint = endpoint
        self._region = region
        self._logger = get_logger(__name__)

    async def upload(
        self,
        bucket: str,
        key: str,
        data: BinaryIO | bytes,
        content_type: str = "application/octet-stream",
    ) -> BlobMetadata:
        """Put one object with its content type."""
        stream: BinaryIO = io.BytesIO(data) if isinstance(data, bytes) else data
        length = _stream_length(stream)

        def _put() -> BlobMetadata:
            result = self._client.put_object(
                bucket_name=bucket,
                object_name=key,
                data=stream,
                length=length,
                content_type=content_type,
                part_size=MULTIPART_PART_SIZE,
            )
            return BlobMetadata(
                bucket=bucket,
                key=key,
                size_bytes=length,
                content_type=content_type,
                etag=result.etag or "",
            )

        loop = asyncio.get_event_loop()
        metadata = await loop.run_in_executor(None, _put)
        self._logger.debug(
            "Put object",
            extra={"bucket": bucket, "storage_key": key, "size_bytes": length},
        )
        return metadata

    async def create_bucket(self, bucket: str) -> bool:
        loop = asyncio.get_event_loop()

        def _create() -> bool:
            if self._client.bucket_exists(bucket_name=bucket):
                return False
            try:
                self._client.make_bucket(bucket_name=bucket, location=self._region)
            except S3Error as e:
                # Lost a race with another process creating the same bucket
                if e.code in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                    return False
                raise
            return True

        created = await loop.run_in_executor(None, _create)
        if created:
            self._logger.info("Created bucket", extra={"bucket": bucket})
        return created

    async def bucket_exists(self, bucket: str) -> bool:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            None, functools.partial(self._client.bucket_exists, bucket_name=bucket)
        )

    async def health_check(self) -> HealthStatus:
        """Probe the endpoint by listing buckets."""
        loop = asyncio.get_event_loop()
        start = time.perf_counter()
        try:
            await loop.run_in_executor(None, self._client.list_buckets)
        except Exception as e:
            return HealthStatus(
                healthy=False,
                latency_ms=(time.perf_counter() - start) * 1000,
                message=f"Object storage unreachable: {e}",
                details={"endpoint": self._endpoint, "error": str(e)},
            )
        return HealthStatus(
            healthy=True,
            latency_ms=(time.perf_counter() - start) * 1000,
            message="Object storage is healthy",
            details={"endpoint": self._endpoint},
        )
