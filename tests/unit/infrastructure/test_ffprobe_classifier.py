"""Unit tests for the ffprobe aspect ratio classifier."""

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.domain.value_objects.aspect_ratio import AspectRatio
from src.infrastructure.video.base import (
    NoStreamsError,
    ProbeExecutionError,
    ProbeParseError,
    ProbeResult,
    StreamInfo,
)
from src.infrastructure.video.ffprobe_classifier import (
    FFprobeAspectRatioClassifier,
    classify_probe_result,
    parse_probe_output,
)

VIDEO_PATH = Path("/tmp/upload.mp4")


def probe_json(*streams: dict) -> bytes:
    return json.dumps({"streams": list(streams)}).encode()


def completed(stdout: bytes) -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    result.returncode = 0
    return result


class TestParseProbeOutput:
    """Tests for decoding ffprobe JSON."""

    def test_parses_streams(self):
        output = probe_json(
            {"index": 0, "codec_type": "video", "width": 1920, "height": 1080},
            {"index": 1, "codec_type": "audio"},
        )

        result = parse_probe_output(output, VIDEO_PATH)

        assert result.streams == (
            StreamInfo(index=0, codec_type="video", width=1920, height=1080),
            StreamInfo(index=1, codec_type="audio", width=0, height=0),
        )

    def test_missing_streams_key_is_empty(self):
        result = parse_probe_output(b"{}", VIDEO_PATH)
        assert result.streams == ()

    def test_invalid_json(self):
        with pytest.raises(ProbeParseError) as exc_info:
            parse_probe_output(b"not json", VIDEO_PATH)

        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
        assert exc_info.value.path == VIDEO_PATH

    def test_top_level_not_object(self):
        with pytest.raises(ProbeParseError):
            parse_probe_output(b"[]", VIDEO_PATH)

    def test_streams_not_list(self):
        with pytest.raises(ProbeParseError):
            parse_probe_output(b'{"streams": "video"}', VIDEO_PATH)

    def test_non_numeric_dimensions(self):
        output = probe_json({"width": "wide", "height": 1080})
        with pytest.raises(ProbeParseError, match="invalid dimensions"):
            parse_probe_output(output, VIDEO_PATH)


class TestClassifyProbeResult:
    """Tests for classifying parsed probe output."""

    def test_uses_first_stream_only(self):
        result = ProbeResult(
            streams=(
                StreamInfo(index=0, codec_type="video", width=1080, height=1920),
                StreamInfo(index=1, codec_type="video", width=1920, height=1080),
            )
        )
        assert classify_probe_result(result, VIDEO_PATH) == AspectRatio.PORTRAIT

    def test_no_streams(self):
        with pytest.raises(NoStreamsError):
            classify_probe_result(ProbeResult(streams=()), VIDEO_PATH)


class TestFFprobeAspectRatioClassifier:
    """Tests for FFprobeAspectRatioClassifier."""

    @pytest.fixture
    def classifier(self):
        return FFprobeAspectRatioClassifier(ffprobe_path="/usr/bin/ffprobe")

    @pytest.mark.parametrize(
        ("width", "height", "expected"),
        [
            (1920, 1080, AspectRatio.LANDSCAPE),
            (1080, 1920, AspectRatio.PORTRAIT),
            (1000, 1000, AspectRatio.OTHER),
        ],
    )
    async def test_get_aspect_ratio(self, classifier, width, height, expected):
        output = probe_json({"index": 0, "width": width, "height": height})

        with patch("subprocess.run", return_value=completed(output)):
            result = await classifier.get_aspect_ratio(VIDEO_PATH)

        assert result == expected

    async def test_invokes_ffprobe_with_json_stream_listing(self, classifier):
        output = probe_json({"width": 1920, "height": 1080})

        with patch("subprocess.run", return_value=completed(output)) as mock_run:
            await classifier.get_aspect_ratio(VIDEO_PATH)

        cmd = mock_run.call_args.args[0]
        assert cmd == [
            "/usr/bin/ffprobe",
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_streams",
            str(VIDEO_PATH),
        ]
        assert mock_run.call_args.kwargs["check"] is True

    async def test_zero_streams(self, classifier):
        with (
            patch("subprocess.run", return_value=completed(probe_json())),
            pytest.raises(NoStreamsError),
        ):
            await classifier.get_aspect_ratio(VIDEO_PATH)

    async def test_malformed_output(self, classifier):
        with (
            patch("subprocess.run", return_value=completed(b"garbage")),
            pytest.raises(ProbeParseError),
        ):
            await classifier.get_aspect_ratio(VIDEO_PATH)

    async def test_nonzero_exit(self, classifier):
        error = subprocess.CalledProcessError(
            1, ["ffprobe"], output=b"", stderr=b"Invalid data found"
        )

        with (
            patch("subprocess.run", side_effect=error),
            pytest.raises(ProbeExecutionError, match="Invalid data found") as exc_info,
        ):
            await classifier.get_aspect_ratio(VIDEO_PATH)

        assert exc_info.value.__cause__ is error

    async def test_tool_missing(self, classifier):
        with (
            patch("subprocess.run", side_effect=FileNotFoundError("ffprobe")),
            pytest.raises(ProbeExecutionError, match="Failed to run ffprobe"),
        ):
            await classifier.get_aspect_ratio(VIDEO_PATH)
