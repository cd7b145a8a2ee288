"""Object storage key generation."""

import base64
import secrets
from collections.abc import Callable

KEY_RANDOM_BYTES = 32
VIDEO_EXTENSION = ".mp4"


def generate_storage_key(
    prefix: str | None = None,
    *,
    random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    extension: str = VIDEO_EXTENSION,
) -> str:
    """Generate a random object key such as ``landscape/<43 chars>.mp4``.

    The name is 32 random bytes encoded as unpadded URL-safe base64.

    Args:
        prefix: Optional folder-like prefix; empty or None means no prefix.
        random_bytes: Source of randomness, ``secrets.token_bytes`` by default.
        extension: File extension appended to the name.

    Returns:
        The object key.

    Raises:
        ValueError: If the random source returns too few bytes.
    """
    raw = random_bytes(KEY_RANDOM_BYTES)
    if len(raw) != KEY_RANDOM_BYTES:
        msg = f"Random source returned {len(raw)} bytes, expected {KEY_RANDOM_BYTES}"
        raise ValueError(msg)

    name = base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii") + extension
    prefix = (prefix or "").strip("/")
    if prefix:
        return f"{prefix}/{name}"
    return name
