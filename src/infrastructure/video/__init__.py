"""Video processing services backed by ffmpeg/ffprobe."""

from src.infrastructure.video.base import (
    AspectRatioClassifierBase,
    FastStartProcessorBase,
    NoStreamsError,
    ProbeExecutionError,
    ProbeParseError,
    ProbeResult,
    StreamInfo,
    TranscodeExecutionError,
    VideoToolError,
)
from src.infrastructure.video.ffmpeg_faststart import FFmpegFastStartProcessor
from src.infrastructure.video.ffprobe_classifier import FFprobeAspectRatioClassifier

__all__ = [
    # Base classes
    "AspectRatioClassifierBase",
    "FastStartProcessorBase",
    "ProbeResult",
    "StreamInfo",
    # Implementations
    "FFmpegFastStartProcessor",
    "FFprobeAspectRatioClassifier",
    # Exceptions
    "VideoToolError",
    "ProbeExecutionError",
    "ProbeParseError",
    "NoStreamsError",
    "TranscodeExecutionError",
]
