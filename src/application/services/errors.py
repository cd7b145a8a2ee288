"""Errors raised by the video upload pipeline.

Each error records the pipeline step it came from and the HTTP status it
maps to. The underlying exception, when there is one, is chained as
``__cause__``.
"""

from http import HTTPStatus

from src.application.dtos.upload import ProcessingStep


class VideoUploadError(Exception):
    """Base exception for upload pipeline errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, step: ProcessingStep) -> None:
        self.step = step
        self.message = message
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        return self.status_code < HTTPStatus.INTERNAL_SERVER_ERROR


class PayloadTooLargeError(VideoUploadError):
    """Raised when the request body exceeds the configured maximum."""

    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(
            f"Video too large. Max size is {max_bytes} bytes.",
            ProcessingStep.VALIDATING,
        )


class MissingFileError(VideoUploadError):
    """Raised when the multipart form has no file under the expected field."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(
            f"No file uploaded in form field '{field_name}'",
            ProcessingStep.VALIDATING,
        )


class InvalidFormError(VideoUploadError):
    """Raised when the request body is not a parseable multipart form."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, reason: str) -> None:
        super().__init__(f"Error parsing form: {reason}", ProcessingStep.VALIDATING)


class UnsupportedMediaTypeError(VideoUploadError):
    """Raised when the uploaded part is not an MP4 video."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, media_type: str, expected: str) -> None:
        self.media_type = media_type
        self.expected = expected
        super().__init__(
            f"Invalid file type {media_type or '<none>'!r}, expected {expected!r}",
            ProcessingStep.VALIDATING,
        )


class StagingIOError(VideoUploadError):
    """Raised when the upload cannot be written to or removed from local disk."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ProcessingStep.STAGING)


class ClassificationError(VideoUploadError):
    """Raised when the aspect ratio of the staged video cannot be determined."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ProcessingStep.CLASSIFYING)


class TranscodeError(VideoUploadError):
    """Raised when fast-start processing fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ProcessingStep.TRANSCODING)


class RenameError(VideoUploadError):
    """Raised when the processed file cannot be moved to its final name."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ProcessingStep.FINALIZING)


class UploadError(VideoUploadError):
    """Raised when the put-object call to storage fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ProcessingStep.UPLOADING)


class PersistenceError(VideoUploadError):
    """Raised when the updated video record cannot be saved."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ProcessingStep.PERSISTING)
