"""ffprobe implementation of aspect ratio classification."""

import asyncio
import json
import subprocess
from pathlib import Path
from typing import Any

from src.commons.telemetry import get_logger
from src.domain.value_objects.aspect_ratio import AspectRatio, classify_dimensions
from src.infrastructure.video.base import (
    AspectRatioClassifierBase,
    NoStreamsError,
    ProbeExecutionError,
    ProbeParseError,
    ProbeResult,
    StreamInfo,
)

logger = get_logger(__name__)


def parse_probe_output(output: bytes | str, video_path: Path) -> ProbeResult:
    """Decode ``ffprobe -print_format json -show_streams`` output.

    Streams without integer width/height (audio, data) are reported with
    zero dimensions; only the list structure itself is validated.

    Raises:
        ProbeParseError: If the output is not a JSON object with a list of
            stream objects.
    """
    try:
        data: Any = json.loads(output)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProbeParseError(video_path, "Could not decode probe output") from e

    if not isinstance(data, dict):
        raise ProbeParseError(video_path, "Probe output is not a JSON object")

    raw_streams = data.get("streams", [])
    if not isinstance(raw_streams, list):
        raise ProbeParseError(video_path, "Probe 'streams' is not a list")

    streams: list[StreamInfo] = []
    for idx, raw in enumerate(raw_streams):
        if not isinstance(raw, dict):
            raise ProbeParseError(video_path, f"Stream {idx} is not an object")
        try:
            streams.append(
                StreamInfo(
                    index=int(raw.get("index", idx)),
                    codec_type=raw.get("codec_type"),
                    width=int(raw.get("width", 0)),
                    height=int(raw.get("height", 0)),
                )
            )
        except (TypeError, ValueError) as e:
            raise ProbeParseError(
                video_path, f"Stream {idx} has invalid dimensions"
            ) from e

    return ProbeResult(streams=tuple(streams))


def classify_probe_result(result: ProbeResult, video_path: Path) -> AspectRatio:
    """Classify the first stream of a probe result.

    Raises:
        NoStreamsError: If the result has no streams.
    """
    if not result.streams:
        raise NoStreamsError(video_path, "Unable to find width and height of video")
    stream = result.first_stream
    return classify_dimensions(stream.width, stream.height)


class FFprobeAspectRatioClassifier(AspectRatioClassifierBase):
    """Classifies videos by running ffprobe on them.

    Requires ffprobe to be installed and available in PATH.
    """

    def __init__(self, ffprobe_path: str = "ffprobe") -> None:
        """Initialize the classifier.

        Args:
            ffprobe_path: Path to ffprobe executable.
        """
        self._ffprobe = ffprobe_path

    async def probe(self, video_path: Path) -> ProbeResult:
        """Run ffprobe and parse its stream listing."""
        cmd = [
            self._ffprobe,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_streams",
            str(video_path),
        ]

        loop = asyncio.get_event_loop()
        try:
            result = await loop.run_in_executor(
                None,
                lambda: subprocess.run(cmd, capture_output=True, check=True),
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise ProbeExecutionError(
                video_path, f"ffprobe exited with status {e.returncode}: {stderr}"
            ) from e
        except OSError as e:
            raise ProbeExecutionError(video_path, "Failed to run ffprobe") from e

        return parse_probe_output(result.stdout, video_path)

    async def get_aspect_ratio(self, video_path: Path) -> AspectRatio:
        """Classify the first stream of ``video_path``."""
        result = await self.probe(video_path)
        aspect_ratio = classify_probe_result(result, video_path)
        logger.debug(
            "Classified video aspect ratio",
            extra={
                "video_path": str(video_path),
                "width": result.first_stream.width,
                "height": result.first_stream.height,
                "aspect_ratio": aspect_ratio.value,
            },
        )
        return aspect_ratio
