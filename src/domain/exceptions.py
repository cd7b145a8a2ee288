"""Domain exceptions for the video hosting system."""


class DomainException(Exception):
    """Base exception for domain errors."""


class InvalidVideoIdException(DomainException):
    """Raised when a video identifier is not a valid UUID."""

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(f"Invalid video ID: {video_id!r}")


class VideoNotFoundException(DomainException):
    """Raised when a requested video record does not exist."""

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(f"Video not found: {video_id}")


class ForbiddenException(DomainException):
    """Raised when a caller acts on a video they do not own."""

    def __init__(self, video_id: str, user_id: str) -> None:
        self.video_id = video_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not the owner of video {video_id}")
