"""Video file upload endpoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, HTTPException, Request
from starlette.datastructures import UploadFile
from starlette.formparsers import MultiPartException
from starlette.types import Message

from src.api.auth import CurrentUserDep
from src.api.dependencies import SettingsDep, UploadServiceDep
from src.application.dtos.upload import VideoUpload
from src.application.services.errors import (
    InvalidFormError,
    MissingFileError,
    PayloadTooLargeError,
)
from src.commons.telemetry import get_logger
from src.domain.models.video import Video, parse_video_id

router = APIRouter()
logger = get_logger(__name__)

VIDEO_FORM_FIELD = "video"


class _BodyLimitExceeded(MultiPartException):
    """Stops the multipart parser; it closes the parts spooled so far."""


@asynccontextmanager
async def read_video_form(
    request: Request,
    max_bytes: int,
    field_name: str = VIDEO_FORM_FIELD,
) -> AsyncIterator[VideoUpload]:
    """Parse the multipart body and yield the uploaded video part.

    The body is never read past ``max_bytes``: a larger declared
    Content-Length is rejected up front, and the received byte count is
    checked while the form streams in. Spooled form files are closed on exit.

    Raises:
        PayloadTooLargeError: If the body exceeds ``max_bytes``.
        InvalidFormError: If the body is not a parseable form.
        MissingFileError: If no file was sent under ``field_name``.
    """
    content_length = request.headers.get("Content-Length")
    if content_length is not None:
        try:
            declared = int(content_length)
        except ValueError as e:
            raise InvalidFormError("invalid Content-Length header") from e
        if declared > max_bytes:
            raise PayloadTooLargeError(max_bytes)

    received = 0
    over_limit = False

    async def limited_receive() -> Message:
        nonlocal received, over_limit
        message = await request.receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > max_bytes:
                over_limit = True
                raise _BodyLimitExceeded(f"body exceeds {max_bytes} bytes")
        return message

    limited = Request(request.scope, limited_receive)
    try:
        form = await limited.form()
    except (MultiPartException, HTTPException) as e:
        # Inside an app Starlette re-raises parser errors as HTTPException(400)
        if over_limit:
            raise PayloadTooLargeError(max_bytes) from e
        reason = getattr(e, "message", None) or getattr(e, "detail", None) or str(e)
        raise InvalidFormError(str(reason)) from e

    try:
        part = form.get(field_name)
        if not isinstance(part, UploadFile):
            raise MissingFileError(field_name)

        logger.debug(
            "Received upload form",
            extra={"upload_filename": part.filename, "received_bytes": received},
        )
        yield VideoUpload(
            file=part.file,
            content_type=part.content_type,
            filename=part.filename,
        )
    finally:
        await form.close()


@router.post(
    "/videos/{video_id}/upload",
    response_model=Video,
    summary="Upload video file",
    description=(
        "Upload an MP4 file for a video. The file is rewritten for fast-start "
        "playback, stored under its aspect ratio and the video URL is recorded."
    ),
)
async def upload_video(
    video_id: str,
    request: Request,
    user_id: CurrentUserDep,
    service: UploadServiceDep,
    settings: SettingsDep,
) -> Video:
    """Attach an uploaded video file to a video record owned by the caller."""
    video_id = parse_video_id(video_id)
    max_bytes = settings.processing.max_upload_size_bytes

    async with read_video_form(request, max_bytes) as upload:
        return await service.upload_video(video_id, user_id, upload)
