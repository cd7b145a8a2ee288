"""Infrastructure factory for creating service instances from configuration."""

from typing import Any, cast

from src.commons.infrastructure.blob import BlobStorageBase, MinioBlobStorage
from src.commons.infrastructure.documentdb import DocumentDBBase, MongoDBDocumentDB
from src.commons.settings.models import Settings
from src.commons.telemetry import get_logger
from src.infrastructure.video import (
    AspectRatioClassifierBase,
    FastStartProcessorBase,
    FFmpegFastStartProcessor,
    FFprobeAspectRatioClassifier,
)

logger = get_logger(__name__)


class InfrastructureFactory:
    """Factory for creating infrastructure service instances.

    Instances are created lazily from settings and cached for the lifetime
    of the factory.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize factory with settings.

        Args:
            settings: Application settings.
        """
        self._settings = settings
        self._instances: dict[str, Any] = {}

    def get_blob_storage(self) -> BlobStorageBase:
        """Get the S3-compatible blob storage client."""
        if "blob_storage" not in self._instances:
            blob_settings = self._settings.blob_storage
            self._instances["blob_storage"] = MinioBlobStorage(
                endpoint=blob_settings.endpoint,
                access_key=blob_settings.access_key,
                secret_key=blob_settings.secret_key,
                secure=blob_settings.use_ssl,
                region=blob_settings.region,
            )
        return cast("BlobStorageBase", self._instances["blob_storage"])

    def get_document_db(self) -> DocumentDBBase:
        """Get the document database client."""
        if "document_db" not in self._instances:
            doc_settings = self._settings.document_db
            if doc_settings.username and doc_settings.password:
                connection_string = (
                    f"mongodb://{doc_settings.username}:{doc_settings.password}"
                    f"@{doc_settings.host}:{doc_settings.port}"
                    f"/?authSource={doc_settings.auth_source}"
                )
            else:
                connection_string = f"mongodb://{doc_settings.host}:{doc_settings.port}"
            self._instances["document_db"] = MongoDBDocumentDB(
                connection_string=connection_string,
                database_name=doc_settings.database,
            )
        return cast("DocumentDBBase", self._instances["document_db"])

    def get_aspect_ratio_classifier(self) -> AspectRatioClassifierBase:
        """Get the ffprobe-based aspect ratio classifier."""
        if "aspect_ratio_classifier" not in self._instances:
            self._instances["aspect_ratio_classifier"] = FFprobeAspectRatioClassifier(
                ffprobe_path=self._settings.processing.ffprobe_path,
            )
        return cast(
            "AspectRatioClassifierBase", self._instances["aspect_ratio_classifier"]
        )

    def get_fast_start_processor(self) -> FastStartProcessorBase:
        """Get the ffmpeg-based fast-start processor."""
        if "fast_start_processor" not in self._instances:
            self._instances["fast_start_processor"] = FFmpegFastStartProcessor(
                ffmpeg_path=self._settings.processing.ffmpeg_path,
            )
        return cast("FastStartProcessorBase", self._instances["fast_start_processor"])

    async def close_all(self) -> None:
        """Close all service connections."""
        for name, instance in self._instances.items():
            if not hasattr(instance, "close"):
                continue
            try:
                close_result = instance.close()
                if hasattr(close_result, "__await__"):
                    await close_result
            except Exception as e:
                logger.warning(
                    "Error closing service", extra={"service": name, "error": str(e)}
                )

        self._instances.clear()


class _FactoryHolder:
    """Holder for the factory singleton to avoid global statements."""

    instance: InfrastructureFactory | None = None


def get_factory(settings: Settings | None = None) -> InfrastructureFactory:
    """Get or create the infrastructure factory singleton.

    Args:
        settings: Settings to use. Required on first call.

    Returns:
        Infrastructure factory instance.

    Raises:
        ValueError: If settings not provided on first call.
    """
    if _FactoryHolder.instance is None:
        if settings is None:
            raise ValueError("Settings required to initialize factory")
        _FactoryHolder.instance = InfrastructureFactory(settings)

    return _FactoryHolder.instance


def reset_factory() -> None:
    """Reset the factory singleton (for testing)."""
    _FactoryHolder.instance = None
