"""Unit tests for multipart upload reading with a body size limit."""

import tempfile

import pytest
from starlette.requests import Request

from src.api.openapi.routes.uploads import read_video_form
from src.application.services.errors import (
    InvalidFormError,
    MissingFileError,
    PayloadTooLargeError,
)

BOUNDARY = "tubelyboundary"


def file_part(payload: bytes, field: str, filename: str = "boots.mp4") -> bytes:
    return (
        f"--{BOUNDARY}\r\n"
        f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
        "Content-Type: video/mp4\r\n\r\n"
    ).encode() + payload + b"\r\n"


def multipart_body(payload: bytes, field: str = "video") -> bytes:
    return file_part(payload, field) + f"--{BOUNDARY}--\r\n".encode()


def two_part_body(thumbnail: bytes, video: bytes) -> bytes:
    return (
        file_part(thumbnail, "thumbnail", "thumb.png")
        + file_part(video, "video")
        + f"--{BOUNDARY}--\r\n".encode()
    )


@pytest.fixture
def spooled_files(monkeypatch):
    """Record every temp file the multipart parser spools parts into."""
    created = []
    real = tempfile.SpooledTemporaryFile

    def recording(*args, **kwargs):
        spooled = real(*args, **kwargs)
        created.append(spooled)
        return spooled

    monkeypatch.setattr("starlette.formparsers.SpooledTemporaryFile", recording)
    return created


def make_request(
    body: bytes,
    chunk_size: int = 512,
    content_length: str | None = None,
    in_app: bool = False,
) -> tuple[Request, list[int]]:
    """Build a request whose body arrives in chunks; returns bytes delivered."""
    headers = [
        (b"content-type", f"multipart/form-data; boundary={BOUNDARY}".encode()),
    ]
    if content_length is not None:
        headers.append((b"content-length", content_length.encode()))

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/upload",
        "query_string": b"",
        "headers": headers,
    }
    if in_app:
        # Starlette turns parser errors into HTTPException when an app is set
        scope["app"] = object()
    chunks = [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)]
    delivered: list[int] = []

    async def receive():
        if not chunks:
            return {"type": "http.request", "body": b"", "more_body": False}
        chunk = chunks.pop(0)
        delivered.append(len(chunk))
        return {"type": "http.request", "body": chunk, "more_body": bool(chunks)}

    return Request(scope, receive), delivered


class TestReadVideoForm:
    """Tests for read_video_form."""

    async def test_yields_video_part(self):
        request, _ = make_request(multipart_body(b"mp4 payload"))

        async with read_video_form(request, max_bytes=4096) as upload:
            assert upload.filename == "boots.mp4"
            assert upload.content_type == "video/mp4"
            assert upload.file.read() == b"mp4 payload"

    async def test_streamed_body_over_limit_without_content_length(self):
        request, delivered = make_request(multipart_body(b"x" * 20_000))

        with pytest.raises(PayloadTooLargeError) as exc_info:
            async with read_video_form(request, max_bytes=2048):
                pass

        assert exc_info.value.max_bytes == 2048
        assert exc_info.value.status_code == 413
        # Reading stops at the first chunk past the limit
        assert sum(delivered) <= 2048 + 512

    async def test_declared_length_over_limit_reads_nothing(self):
        request, delivered = make_request(
            multipart_body(b"x" * 100), content_length="999999"
        )

        with pytest.raises(PayloadTooLargeError):
            async with read_video_form(request, max_bytes=2048):
                pass

        assert delivered == []

    async def test_invalid_content_length(self):
        request, _ = make_request(multipart_body(b"x"), content_length="lots")

        with pytest.raises(InvalidFormError):
            async with read_video_form(request, max_bytes=2048):
                pass

    async def test_missing_video_field(self):
        request, _ = make_request(multipart_body(b"x", field="thumbnail"))

        with pytest.raises(MissingFileError) as exc_info:
            async with read_video_form(request, max_bytes=4096):
                pass

        assert exc_info.value.field_name == "video"
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("in_app", [False, True])
    async def test_over_limit_closes_spooled_parts(self, spooled_files, in_app):
        body = two_part_body(b"png" * 10, b"x" * 20_000)
        request, _ = make_request(body, in_app=in_app)

        with pytest.raises(PayloadTooLargeError) as exc_info:
            async with read_video_form(request, max_bytes=2048):
                pass

        assert exc_info.value.status_code == 413
        assert spooled_files
        assert all(spooled.closed for spooled in spooled_files)

    async def test_form_files_closed_after_use(self, spooled_files):
        request, _ = make_request(two_part_body(b"png", b"mp4 payload"))

        async with read_video_form(request, max_bytes=4096) as upload:
            assert upload.file.read() == b"mp4 payload"
            assert not any(spooled.closed for spooled in spooled_files)

        assert len(spooled_files) == 2
        assert all(spooled.closed for spooled in spooled_files)
