"""FFmpeg implementation of fast-start processing."""

import asyncio
import subprocess
from pathlib import Path

from src.commons.telemetry import get_logger
from src.infrastructure.video.base import (
    FastStartProcessorBase,
    TranscodeExecutionError,
)

logger = get_logger(__name__)


class FFmpegFastStartProcessor(FastStartProcessorBase):
    """Moves the MP4 ``moov`` atom to the front of the file with ffmpeg.

    Streams are copied without re-encoding. Requires ffmpeg to be installed
    and available in PATH.
    """

    def __init__(self, ffmpeg_path: str = "ffmpeg") -> None:
        """Initialize the processor.

        Args:
            ffmpeg_path: Path to ffmpeg executable.
        """
        self._ffmpeg = ffmpeg_path

    def build_command(self, video_path: Path, output_path: Path) -> list[str]:
        """Build the ffmpeg command line for a fast-start copy."""
        return [
            self._ffmpeg,
            "-i",
            str(video_path),
            "-c",
            "copy",
            "-movflags",
            "faststart",
            "-f",
            "mp4",
            str(output_path),
        ]

    async def process_fast_start(self, video_path: Path) -> Path:
        """Write ``<video_path>.processing`` with metadata moved to the front."""
        output_path = self.output_path_for(video_path)
        cmd = self.build_command(video_path, output_path)

        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(
                None,
                lambda: subprocess.run(cmd, capture_output=True, check=True),
            )
        except subprocess.CalledProcessError as e:
            output_path.unlink(missing_ok=True)
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise TranscodeExecutionError(
                video_path, f"ffmpeg exited with status {e.returncode}: {stderr}"
            ) from e
        except OSError as e:
            output_path.unlink(missing_ok=True)
            raise TranscodeExecutionError(video_path, "Failed to run ffmpeg") from e

        logger.debug(
            "Wrote fast-start copy",
            extra={"video_path": str(video_path), "output_path": str(output_path)},
        )
        return output_path
