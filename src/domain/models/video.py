"""Video record domain model."""

from datetime import UTC, datetime
from typing import Self
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from src.domain.exceptions import InvalidVideoIdException


class Video(BaseModel):
    """A video owned by a user.

    Created as a draft with title and description; the thumbnail and video
    URLs are filled in by the upload endpoints.
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="UUID of this video record",
    )
    user_id: str = Field(description="ID of the owning user")
    title: str = Field(min_length=1, description="Video title")
    description: str = Field(default="", description="Video description")
    thumbnail_url: str | None = Field(
        default=None,
        description="Public URL of the thumbnail image",
    )
    video_url: str | None = Field(
        default=None,
        description="Public URL of the processed video in object storage",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When this record was created",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Last metadata update timestamp",
    )

    def is_owned_by(self, user_id: str) -> bool:
        """Check whether ``user_id`` owns this video."""
        return self.user_id == user_id

    def with_video_url(self, video_url: str) -> Self:
        """Return a copy with only the video URL replaced."""
        return self.model_copy(update={"video_url": video_url})


def parse_video_id(value: str) -> str:
    """Validate a video ID and return it in canonical UUID form.

    Raises:
        InvalidVideoIdException: If ``value`` is not a UUID.
    """
    try:
        return str(UUID(value))
    except (ValueError, TypeError) as e:
        raise InvalidVideoIdException(str(value)) from e
