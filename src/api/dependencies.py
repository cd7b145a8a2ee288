"""FastAPI dependency injection for services and settings."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.application.services.storage import VideoStorageService
from src.application.services.upload import VideoUploadService
from src.commons.settings.loader import get_settings as _load_settings
from src.commons.settings.models import Settings
from src.commons.telemetry import get_logger
from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)

logger = get_logger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Application settings loaded from config files and environment.
    """
    return _load_settings()


def get_infrastructure_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> InfrastructureFactory:
    """Get infrastructure factory with all providers.

    Args:
        settings: Application settings.

    Returns:
        Configured infrastructure factory.
    """
    return get_factory(settings)


def get_video_storage_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VideoStorageService:
    """Get the video record gateway."""
    return VideoStorageService(
        blob_storage=factory.get_blob_storage(),
        document_db=factory.get_document_db(),
        blob_settings=settings.blob_storage,
        doc_settings=settings.document_db,
    )


def get_upload_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    video_storage: Annotated[VideoStorageService, Depends(get_video_storage_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VideoUploadService:
    """Get video upload service with all dependencies.

    Args:
        factory: Infrastructure factory.
        video_storage: Video record gateway.
        settings: Application settings.

    Returns:
        Configured video upload service.
    """
    return VideoUploadService(
        classifier=factory.get_aspect_ratio_classifier(),
        fast_start_processor=factory.get_fast_start_processor(),
        blob_storage=factory.get_blob_storage(),
        video_storage=video_storage,
        settings=settings,
    )


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
FactoryDep = Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)]
VideoStorageDep = Annotated[VideoStorageService, Depends(get_video_storage_service)]
UploadServiceDep = Annotated[VideoUploadService, Depends(get_upload_service)]


async def init_services(settings: Settings) -> None:
    """Initialize all infrastructure services on startup.

    Args:
        settings: Application settings.
    """
    factory = get_factory(settings)

    # Pre-initialize critical services to fail fast
    blob_storage = factory.get_blob_storage()
    document_db = factory.get_document_db()

    if settings.blob_storage.auto_create_buckets:
        storage = VideoStorageService(
            blob_storage=blob_storage,
            document_db=document_db,
            blob_settings=settings.blob_storage,
            doc_settings=settings.document_db,
        )
        await storage.ensure_buckets_exist()


async def shutdown_services() -> None:
    """Shutdown all infrastructure services."""
    try:
        factory = get_factory()
        await factory.close_all()
    except ValueError:
        logger.debug("Infrastructure factory was never initialized")
    finally:
        reset_factory()
        get_settings.cache_clear()
