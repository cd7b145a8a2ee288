"""Error handling middleware and exception handlers."""

from http import HTTPStatus
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from src.api.auth import AuthenticationError
from src.application.services.errors import VideoUploadError
from src.commons.telemetry.logger import get_logger
from src.domain.exceptions import (
    DomainException,
    ForbiddenException,
    InvalidVideoIdException,
    VideoNotFoundException,
)

logger = get_logger(__name__)


def _build_error_response(
    request: Request,
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build standardized error response.

    Args:
        request: HTTP request.
        code: Error code.
        message: Error message.
        status_code: HTTP status code.
        details: Additional details.

    Returns:
        JSON error response.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "request_id": request_id,
            }
        },
    )


def _upload_error_response(request: Request, exc: VideoUploadError) -> JSONResponse:
    details: dict[str, Any] = {"step": exc.step.value}
    if exc.__cause__ is not None:
        details["cause"] = str(exc.__cause__)

    if exc.is_client_error:
        logger.warning(
            f"Upload rejected at step {exc.step.value}: {exc}",
            extra={"details": details},
        )
        code = "VALIDATION_ERROR"
        if exc.status_code == HTTPStatus.REQUEST_ENTITY_TOO_LARGE:
            code = "PAYLOAD_TOO_LARGE"
    else:
        logger.error(
            f"Upload failed at step {exc.step.value}: {exc}",
            extra={"details": details},
        )
        code = "UPLOAD_ERROR"

    return _build_error_response(
        request=request,
        code=code,
        message=exc.message,
        status_code=int(exc.status_code),
        details=details,
    )


def _handle_exception(  # noqa: PLR0911
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle exception and return appropriate error response.

    Args:
        request: HTTP request.
        exc: Exception to handle.

    Returns:
        JSON error response.
    """
    if isinstance(exc, AuthenticationError):
        logger.warning(f"Authentication failed: {exc}")
        return _build_error_response(
            request=request,
            code="UNAUTHORIZED",
            message=str(exc),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if isinstance(exc, InvalidVideoIdException):
        logger.warning(f"Invalid video ID: {exc}")
        return _build_error_response(
            request=request,
            code="INVALID_VIDEO_ID",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"video_id": exc.video_id},
        )

    if isinstance(exc, VideoNotFoundException):
        logger.warning(f"Video not found: {exc}")
        return _build_error_response(
            request=request,
            code="VIDEO_NOT_FOUND",
            message=str(exc),
            status_code=status.HTTP_404_NOT_FOUND,
            details={"video_id": exc.video_id},
        )

    if isinstance(exc, ForbiddenException):
        logger.warning(f"Forbidden: {exc}")
        return _build_error_response(
            request=request,
            code="FORBIDDEN",
            message="You are not the owner of this video",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"video_id": exc.video_id},
        )

    if isinstance(exc, VideoUploadError):
        return _upload_error_response(request, exc)

    if isinstance(exc, DomainException):
        logger.warning(f"Domain error: {exc}")
        return _build_error_response(
            request=request,
            code="DOMAIN_ERROR",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # Catch-all for unexpected errors
    logger.exception(f"Unexpected error: {exc}")
    return _build_error_response(
        request=request,
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def error_handler_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Middleware to catch and format all exceptions.

    Args:
        request: HTTP request.
        call_next: Next handler in chain.

    Returns:
        HTTP response.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return _handle_exception(request, exc)
