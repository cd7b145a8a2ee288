"""Public URL construction for stored objects."""

from urllib.parse import quote


def build_object_url(
    bucket: str,
    region: str,
    key: str,
    public_base_url: str | None = None,
) -> str:
    """Build the canonical URL of an object.

    Without a ``public_base_url`` this is the virtual-hosted S3 form
    ``https://<bucket>.s3.<region>.amazonaws.com/<key>``. With one (a MinIO
    endpoint or a CDN in front of the bucket) the key is appended to it.

    The key is path-quoted with ``/`` and ``:`` kept literal, so ratio
    prefixes such as ``16:9/`` appear unchanged in the URL. Leading
    slashes are dropped so an empty prefix never produces ``//``.

    Args:
        bucket: Bucket name.
        region: Bucket region.
        key: Object key, optionally containing a ``prefix/`` part.
        public_base_url: Optional base URL replacing the S3 host.

    Returns:
        Absolute URL string.

    Raises:
        ValueError: If bucket or key is empty, or region is empty when no
            base URL is given.
    """
    if not bucket:
        raise ValueError("bucket must not be empty")
    normalized_key = key.lstrip("/")
    if not normalized_key:
        raise ValueError("key must not be empty")

    quoted_key = quote(normalized_key, safe="/:")

    if public_base_url:
        return f"{public_base_url.rstrip('/')}/{quoted_key}"

    if not region:
        raise ValueError("region must not be empty")
    return f"https://{bucket}.s3.{region}.amazonaws.com/{quoted_key}"
