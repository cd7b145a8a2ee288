"""Video storage service for metadata records and bucket provisioning."""

from src.commons.infrastructure.blob.base import BlobStorageBase
from src.commons.infrastructure.documentdb.base import DocumentDBBase
from src.commons.settings.models import BlobStorageSettings, DocumentDBSettings
from src.commons.telemetry import get_logger
from src.domain.models.video import Video


class VideoStorageService:
    """Gateway to persisted video records.

    Handles:
    - Video record fetch/create/update in the document database
    - Provisioning of the videos bucket in blob storage
    """

    def __init__(
        self,
        blob_storage: BlobStorageBase,
        document_db: DocumentDBBase,
        blob_settings: BlobStorageSettings,
        doc_settings: DocumentDBSettings,
    ) -> None:
        """Initialize storage service.

        Args:
            blob_storage: Blob storage provider.
            document_db: Document database provider.
            blob_settings: Blob storage configuration.
            doc_settings: Document database configuration.
        """
        self._blob = blob_storage
        self._doc_db = document_db
        self._logger = get_logger(__name__)

        self._videos_bucket = blob_settings.buckets.videos
        self._videos_collection = doc_settings.collections.videos

    # =========================================================================
    # Bucket management
    # =========================================================================

    async def ensure_buckets_exist(self) -> bool:
        """Create the videos bucket if it is missing.

        Returns:
            True if the bucket was created.
        """
        if await self._blob.bucket_exists(self._videos_bucket):
            return False
        created = await self._blob.create_bucket(self._videos_bucket)
        if created:
            self._logger.info(
                "Created videos bucket", extra={"bucket": self._videos_bucket}
            )
        return created

    # =========================================================================
    # Video records
    # =========================================================================

    async def get_video(self, video_id: str) -> Video | None:
        """Fetch a video record by ID."""
        doc = await self._doc_db.find_by_id(self._videos_collection, video_id)
        if doc is None:
            return None
        return Video.model_validate(doc)

    async def create_video(self, video: Video) -> Video:
        """Persist a new video record."""
        await self._doc_db.insert(self._videos_collection, video.model_dump())
        self._logger.info(
            "Created video record",
            extra={"video_id": video.id, "user_id": video.user_id},
        )
        return video

    async def list_videos(
        self,
        user_id: str,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Video]:
        """List a user's videos, newest first."""
        docs = await self._doc_db.find(
            self._videos_collection,
            {"user_id": user_id},
            skip=skip,
            limit=limit,
            sort=[("created_at", -1)],
        )
        return [Video.model_validate(doc) for doc in docs]

    async def update_video(self, video: Video) -> None:
        """Write every field of ``video`` back to its record.

        Raises:
            LookupError: If no record with the video's ID exists.
        """
        matched = await self._doc_db.update(
            self._videos_collection,
            video.id,
            video.model_dump(exclude={"id"}),
        )
        if not matched:
            msg = f"No video record to update: {video.id}"
            raise LookupError(msg)
