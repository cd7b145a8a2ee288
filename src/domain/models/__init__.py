"""Domain models."""

from src.domain.models.video import Video, parse_video_id

__all__ = [
    "Video",
    "parse_video_id",
]
