"""Video upload orchestration service."""

import asyncio
import logging
import secrets
import shutil
from collections.abc import Callable
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO

from src.application.dtos.upload import VIDEO_MEDIA_TYPE, VideoUpload
from src.application.services.errors import (
    ClassificationError,
    PersistenceError,
    RenameError,
    StagingIOError,
    TranscodeError,
    UnsupportedMediaTypeError,
    UploadError,
)
from src.application.services.storage import VideoStorageService
from src.commons.infrastructure.blob.base import BlobStorageBase
from src.commons.infrastructure.blob.urls import build_object_url
from src.commons.settings.models import Settings
from src.commons.telemetry import LogContext, get_logger, timed
from src.commons.tempfiles import StagedFile, remove_quietly, staged_file
from src.domain.exceptions import ForbiddenException, VideoNotFoundException
from src.domain.models.video import Video
from src.domain.value_objects.aspect_ratio import AspectRatio, AspectRatioLabels
from src.domain.value_objects.storage_key import generate_storage_key
from src.infrastructure.video.base import (
    AspectRatioClassifierBase,
    FastStartProcessorBase,
    VideoToolError,
)


class VideoUploadService:
    """Orchestrates the video upload pipeline.

    Pipeline steps:
    1. Fetch the video record and verify the caller owns it
    2. Accept only ``video/mp4`` uploads
    3. Stage the upload to a temporary file
    4. Classify the aspect ratio with the probe tool
    5. Rewrite the file for fast-start playback
    6. Remove the staged file and rename the processed one into place
    7. Put the file into object storage under a random key
    8. Record the object URL on the video

    Steps run strictly in order; nothing is uploaded unless classification
    and processing both succeed. Temporary files are removed on every exit
    path. There are no retries and no compensation: if the record update
    fails after the upload, the object stays in the bucket.
    """

    def __init__(
        self,
        classifier: AspectRatioClassifierBase,
        fast_start_processor: FastStartProcessorBase,
        blob_storage: BlobStorageBase,
        video_storage: VideoStorageService,
        settings: Settings,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        """Initialize upload service with dependencies.

        Args:
            classifier: Aspect ratio classifier.
            fast_start_processor: Fast-start rewriter.
            blob_storage: Object storage for processed videos.
            video_storage: Gateway to video records.
            settings: Application settings.
            random_bytes: Randomness source for storage keys.
        """
        self._classifier = classifier
        self._processor = fast_start_processor
        self._blob = blob_storage
        self._video_storage = video_storage
        self._random_bytes = random_bytes
        self._logger = get_logger(__name__)

        blob_settings = settings.blob_storage
        self._bucket = blob_settings.buckets.videos
        self._region = blob_settings.region
        self._public_base_url = blob_settings.public_base_url

        processing = settings.processing
        self._labels = AspectRatioLabels.preset(processing.aspect_ratio_labels)
        self._use_prefix = processing.aspect_ratio_prefix
        self._temp_dir = processing.temp_dir

    @timed(level=logging.INFO)
    async def upload_video(
        self,
        video_id: str,
        user_id: str,
        upload: VideoUpload,
    ) -> Video:
        """Process an uploaded video and attach it to a video record.

        Args:
            video_id: ID of the target video record.
            user_id: Authenticated caller.
            upload: The uploaded file part.

        Returns:
            The updated video record.

        Raises:
            VideoNotFoundException: If the record does not exist.
            ForbiddenException: If the caller does not own the record.
            VideoUploadError: If any pipeline step fails.
        """
        with LogContext(video_id=video_id, user_id=user_id):
            video = await self._get_owned_video(video_id, user_id)
            media_type = self._validate_media_type(upload)

            self._logger.info(
                "Starting video upload",
                extra={"upload_filename": upload.filename, "media_type": media_type},
            )
            key = await self._process_and_store(upload.file, media_type)

            video_url = build_object_url(
                self._bucket,
                self._region,
                key,
                public_base_url=self._public_base_url,
            )
            updated = video.with_video_url(video_url)
            await self._persist(updated)

            self._logger.info(
                "Video upload completed",
                extra={"storage_key": key, "video_url": video_url},
            )
            return updated

    async def _get_owned_video(self, video_id: str, user_id: str) -> Video:
        video = await self._video_storage.get_video(video_id)
        if video is None:
            raise VideoNotFoundException(video_id)
        if not video.is_owned_by(user_id):
            raise ForbiddenException(video_id, user_id)
        return video

    def _validate_media_type(self, upload: VideoUpload) -> str:
        media_type = upload.media_type
        if media_type != VIDEO_MEDIA_TYPE:
            raise UnsupportedMediaTypeError(media_type, VIDEO_MEDIA_TYPE)
        return media_type

    async def _process_and_store(self, source: BinaryIO, media_type: str) -> str:
        """Stage, classify, process and upload; returns the storage key."""
        with ExitStack() as stack:
            try:
                staged = stack.enter_context(staged_file(directory=self._temp_dir))
            except OSError as e:
                raise StagingIOError(
                    "Failed to create a temporary file for upload"
                ) from e

            await self._stage(source, staged)
            aspect_ratio = await self._classify(staged.path)

            # Covers a partial output from a failed run and a failed rename
            stack.callback(remove_quietly, self._processor.output_path_for(staged.path))
            processed_path = await self._transcode(staged.path)

            try:
                staged.release()
            except OSError as e:
                raise StagingIOError("Failed to clean up staged upload") from e

            final_path = self._processor.final_path_for(processed_path)
            stack.callback(remove_quietly, final_path)
            try:
                processed_path.rename(final_path)
            except OSError as e:
                raise RenameError(
                    f"Failed to rename processed file {processed_path.name}"
                ) from e

            try:
                final_file = stack.enter_context(final_path.open("rb"))
            except OSError as e:
                raise StagingIOError("Failed to open processed file") from e

            key = generate_storage_key(
                self._key_prefix(aspect_ratio),
                random_bytes=self._random_bytes,
            )
            await self._upload(final_file, key, media_type)
            return key

    async def _stage(self, source: BinaryIO, staged: StagedFile) -> None:
        """Copy the upload into the staged file and rewind it."""
        loop = asyncio.get_event_loop()

        def _copy() -> None:
            shutil.copyfileobj(source, staged.handle)
            staged.handle.flush()
            staged.handle.seek(0)

        try:
            await loop.run_in_executor(None, _copy)
        except OSError as e:
            raise StagingIOError("Error copying upload to temporary file") from e

        self._logger.debug("Staged upload", extra={"staged_path": str(staged.path)})

    async def _classify(self, path: Path) -> AspectRatio:
        try:
            aspect_ratio = await self._classifier.get_aspect_ratio(path)
        except VideoToolError as e:
            raise ClassificationError(f"Unable to get video aspect ratio: {e}") from e

        self._logger.debug(
            "Classified upload", extra={"aspect_ratio": aspect_ratio.value}
        )
        return aspect_ratio

    async def _transcode(self, path: Path) -> Path:
        try:
            return await self._processor.process_fast_start(path)
        except VideoToolError as e:
            raise TranscodeError(f"Unable to process video for fast start: {e}") from e

    def _key_prefix(self, aspect_ratio: AspectRatio) -> str | None:
        if not self._use_prefix:
            return None
        return self._labels.label_for(aspect_ratio)

    async def _upload(self, data: BinaryIO, key: str, media_type: str) -> None:
        try:
            await self._blob.upload(self._bucket, key, data, content_type=media_type)
        except Exception as e:
            raise UploadError(
                f"Failed to upload video to bucket {self._bucket}: {e}"
            ) from e

        self._logger.debug(
            "Uploaded video object",
            extra={"bucket": self._bucket, "storage_key": key},
        )

    async def _persist(self, video: Video) -> None:
        try:
            await self._video_storage.update_video(video)
        except Exception as e:
            raise PersistenceError(f"Failed to update video record: {e}") from e
