"""Video metadata endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from src.api.auth import CurrentUserDep
from src.api.dependencies import VideoStorageDep
from src.application.dtos.upload import CreateVideoRequest
from src.domain.exceptions import ForbiddenException, VideoNotFoundException
from src.domain.models.video import Video, parse_video_id

router = APIRouter()


class VideoListResponse(BaseModel):
    """Response for video listing."""

    videos: list[Video] = Field(description="Videos owned by the caller")
    page: int = Field(ge=1, description="Current page number")
    page_size: int = Field(ge=1, le=100, description="Items per page")


@router.post(
    "/videos",
    response_model=Video,
    status_code=status.HTTP_201_CREATED,
    summary="Create video",
    description="Create a draft video record owned by the caller.",
)
async def create_video(
    request: CreateVideoRequest,
    user_id: CurrentUserDep,
    storage: VideoStorageDep,
) -> Video:
    """Create a draft video; the file is attached later by the upload endpoint."""
    video = Video(
        user_id=user_id,
        title=request.title,
        description=request.description,
    )
    return await storage.create_video(video)


@router.get(
    "/videos",
    response_model=VideoListResponse,
    summary="List videos",
    description="List the caller's videos, newest first.",
)
async def list_videos(
    user_id: CurrentUserDep,
    storage: VideoStorageDep,
    page: Annotated[
        int,
        Query(ge=1, description="Page number"),
    ] = 1,
    page_size: Annotated[
        int,
        Query(ge=1, le=100, description="Items per page"),
    ] = 20,
) -> VideoListResponse:
    """List the caller's videos with pagination."""
    skip = (page - 1) * page_size
    videos = await storage.list_videos(user_id, skip=skip, limit=page_size)
    return VideoListResponse(videos=videos, page=page, page_size=page_size)


@router.get(
    "/videos/{video_id}",
    response_model=Video,
    summary="Get video",
    description="Get a single video owned by the caller.",
)
async def get_video(
    video_id: str,
    user_id: CurrentUserDep,
    storage: VideoStorageDep,
) -> Video:
    """Get details for a specific video."""
    video_id = parse_video_id(video_id)
    video = await storage.get_video(video_id)
    if video is None:
        raise VideoNotFoundException(video_id)
    if not video.is_owned_by(user_id):
        raise ForbiddenException(video_id, user_id)
    return video
