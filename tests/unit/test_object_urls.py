"""Unit tests for object URL construction."""

import pytest

from src.commons.infrastructure.blob.urls import build_object_url


class TestBuildObjectUrl:
    """Tests for build_object_url."""

    def test_virtual_hosted_s3_url(self):
        url = build_object_url("tubely-videos", "us-east-2", "landscape/abc.mp4")
        assert url == "https://tubely-videos.s3.us-east-2.amazonaws.com/landscape/abc.mp4"

    def test_key_without_prefix(self):
        url = build_object_url("bucket", "eu-west-1", "abc.mp4")
        assert url == "https://bucket.s3.eu-west-1.amazonaws.com/abc.mp4"

    def test_leading_slash_does_not_double(self):
        url = build_object_url("bucket", "eu-west-1", "/abc.mp4")

        assert url == "https://bucket.s3.eu-west-1.amazonaws.com/abc.mp4"
        assert "//abc" not in url

    def test_key_is_path_quoted(self):
        url = build_object_url("bucket", "us-east-1", "other/a b.mp4")
        assert url.endswith("/other/a%20b.mp4")

    @pytest.mark.parametrize("key", ["16:9/abc_-.mp4", "9:16/abc.mp4"])
    def test_ratio_prefix_kept_verbatim(self, key):
        url = build_object_url("bucket", "us-east-1", key)
        assert url == f"https://bucket.s3.us-east-1.amazonaws.com/{key}"

    def test_public_base_url_replaces_host(self):
        url = build_object_url(
            "bucket",
            "us-east-1",
            "portrait/abc.mp4",
            public_base_url="http://localhost:9000/bucket/",
        )
        assert url == "http://localhost:9000/bucket/portrait/abc.mp4"

    def test_public_base_url_does_not_need_region(self):
        url = build_object_url(
            "bucket", "", "abc.mp4", public_base_url="https://cdn.example.com"
        )
        assert url == "https://cdn.example.com/abc.mp4"

    @pytest.mark.parametrize(
        ("bucket", "region", "key"),
        [
            ("", "us-east-1", "abc.mp4"),
            ("bucket", "us-east-1", ""),
            ("bucket", "us-east-1", "/"),
            ("bucket", "", "abc.mp4"),
        ],
    )
    def test_missing_parts_rejected(self, bucket, region, key):
        with pytest.raises(ValueError, match="must not be empty"):
            build_object_url(bucket, region, key)
