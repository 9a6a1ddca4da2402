"""Video processing adapters."""

from advidly.adapters.processor.base import ProcessRequest, ProcessResult, VideoProcessor
from advidly.adapters.processor.stub import StubVideoProcessor

__all__ = [
    "ProcessRequest",
    "ProcessResult",
    "StubVideoProcessor",
    "VideoProcessor",
]
