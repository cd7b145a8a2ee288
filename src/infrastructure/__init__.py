"""Infrastructure layer - external service implementations."""

from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from src.infrastructure.video import (
    AspectRatioClassifierBase,
    FastStartProcessorBase,
    FFmpegFastStartProcessor,
    FFprobeAspectRatioClassifier,
    NoStreamsError,
    ProbeExecutionError,
    ProbeParseError,
    TranscodeExecutionError,
    VideoToolError,
)

__all__ = [
    # Factory
    "InfrastructureFactory",
    "get_factory",
    "reset_factory",
    # Video
    "AspectRatioClassifierBase",
    "FastStartProcessorBase",
    "FFprobeAspectRatioClassifier",
    "FFmpegFastStartProcessor",
    "VideoToolError",
    "ProbeExecutionError",
    "ProbeParseError",
    "NoStreamsError",
    "TranscodeExecutionError",
]
