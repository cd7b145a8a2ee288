"""Abstract base classes and errors for external video tools."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from src.domain.value_objects.aspect_ratio import AspectRatio


@dataclass(frozen=True)
class StreamInfo:
    """Dimensions of a single media stream reported by the probe."""

    index: int
    codec_type: str | None
    width: int
    height: int


@dataclass(frozen=True)
class ProbeResult:
    """Parsed probe output; only the first stream is used for classification."""

    streams: tuple[StreamInfo, ...]

    @property
    def first_stream(self) -> StreamInfo:
        return self.streams[0]


class VideoToolError(Exception):
    """Base exception for failures of an external video tool."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class ProbeExecutionError(VideoToolError):
    """Raised when the probe tool cannot run or exits non-zero."""


class ProbeParseError(VideoToolError):
    """Raised when probe output cannot be decoded into streams."""


class NoStreamsError(VideoToolError):
    """Raised when the probe reports no streams at all."""


class TranscodeExecutionError(VideoToolError):
    """Raised when the processing tool cannot run or exits non-zero."""


class AspectRatioClassifierBase(ABC):
    """Determines the coarse aspect ratio of a media file on disk."""

    @abstractmethod
    async def get_aspect_ratio(self, video_path: Path) -> AspectRatio:
        """Classify the first stream of ``video_path``.

        Raises:
            ProbeExecutionError: If the probe tool fails.
            ProbeParseError: If its output is not understood.
            NoStreamsError: If the file has no streams.
        """


class FastStartProcessorBase(ABC):
    """Rewrites a video so playback can begin before download completes."""

    #: Marker appended to the input path to name the output file
    PROCESSING_SUFFIX = ".processing"

    @abstractmethod
    async def process_fast_start(self, video_path: Path) -> Path:
        """Write a fast-start copy of ``video_path`` next to it.

        The input file is left untouched. The returned path carries the
        processing suffix; callers rename it before use.

        Raises:
            TranscodeExecutionError: If the processing tool fails.
        """

    @classmethod
    def output_path_for(cls, video_path: Path) -> Path:
        """Path the processed copy of ``video_path`` is written to."""
        return video_path.with_name(video_path.name + cls.PROCESSING_SUFFIX)

    @classmethod
    def final_path_for(cls, processed_path: Path) -> Path:
        """Path of ``processed_path`` with the processing suffix removed."""
        name = processed_path.name
        if name.endswith(cls.PROCESSING_SUFFIX):
            name = name[: -len(cls.PROCESSING_SUFFIX)]
        return processed_path.with_name(name)
