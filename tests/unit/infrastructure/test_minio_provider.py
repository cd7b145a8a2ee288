"""Unit tests for the MinIO object storage provider."""

import io
from unittest.mock import MagicMock, patch

import pytest

from src.commons.infrastructure.blob.minio_provider import (
    MULTIPART_PART_SIZE,
    MinioBlobStorage,
)


@pytest.fixture
def minio_client():
    with patch("src.commons.infrastructure.blob.minio_provider.Minio") as cls:
        yield cls.return_value


@pytest.fixture
def storage(minio_client):
    return MinioBlobStorage(
        endpoint="localhost:9000",
        access_key="minioadmin",
        secret_key="minioadmin",
        secure=False,
        region="us-east-1",
    )


class TestUpload:
    """Tests for MinioBlobStorage.upload."""

    async def test_puts_file_with_content_type(self, storage, minio_client, tmp_path):
        minio_client.put_object.return_value = MagicMock(etag="abc123")
        path = tmp_path / "processed.mp4"
        path.write_bytes(b"x" * 1234)

        with path.open("rb") as f:
            metadata = await storage.upload(
                "tubely-videos", "landscape/k.mp4", f, content_type="video/mp4"
            )

        kwargs = minio_client.put_object.call_args.kwargs
        assert kwargs["bucket_name"] == "tubely-videos"
        assert kwargs["object_name"] == "landscape/k.mp4"
        assert kwargs["length"] == 1234
        assert kwargs["content_type"] == "video/mp4"
        assert kwargs["part_size"] == MULTIPART_PART_SIZE
        assert metadata.key == "landscape/k.mp4"
        assert metadata.size_bytes == 1234
        assert metadata.etag == "abc123"

    async def test_accepts_bytes(self, storage, minio_client):
        minio_client.put_object.return_value = MagicMock(etag=None)

        metadata = await storage.upload("b", "k.mp4", b"hello")

        kwargs = minio_client.put_object.call_args.kwargs
        assert isinstance(kwargs["data"], io.BytesIO)
        assert kwargs["length"] == 5
        assert kwargs["content_type"] == "application/octet-stream"
        assert metadata.etag == ""

    async def test_length_counts_from_current_position(self, storage, minio_client):
        minio_client.put_object.return_value = MagicMock(etag="e")
        data = io.BytesIO(b"0123456789")
        data.seek(4)

        await storage.upload("b", "k.mp4", data)

        assert minio_client.put_object.call_args.kwargs["length"] == 6
        assert data.tell() == 4

    async def test_sdk_errors_propagate(self, storage, minio_client):
        minio_client.put_object.side_effect = ConnectionError("refused")

        with pytest.raises(ConnectionError):
            await storage.upload("b", "k.mp4", b"data")


class TestBuckets:
    """Tests for bucket management."""

    async def test_create_bucket(self, storage, minio_client):
        minio_client.bucket_exists.return_value = False

        assert await storage.create_bucket("tubely-videos") is True
        minio_client.make_bucket.assert_called_once_with(
            bucket_name="tubely-videos", location="us-east-1"
        )

    async def test_create_existing_bucket(self, storage, minio_client):
        minio_client.bucket_exists.return_value = True

        assert await storage.create_bucket("tubely-videos") is False
        minio_client.make_bucket.assert_not_called()

    async def test_bucket_exists(self, storage, minio_client):
        minio_client.bucket_exists.return_value = True

        assert await storage.bucket_exists("tubely-videos") is True
        minio_client.bucket_exists.assert_called_once_with(bucket_name="tubely-videos")


class TestHealthCheck:
    """Tests for MinioBlobStorage.health_check."""

    async def test_healthy(self, storage, minio_client):
        minio_client.list_buckets.return_value = []

        status = await storage.health_check()

        assert status.healthy is True
        assert status.details == {"endpoint": "localhost:9000"}

    async def test_unhealthy(self, storage, minio_client):
        minio_client.list_buckets.side_effect = ConnectionError("refused")

        status = await storage.health_check()

        assert status.healthy is False
        assert "refused" in status.message
        assert status.latency_ms >= 0
