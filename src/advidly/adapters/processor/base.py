"""Base interface for video processing providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class ProcessRequest:
    """Request to process an uploaded creator video."""

    video_id: int
    raw_file_path: str
    options: dict[str, Any] | None = None


@dataclass
class ProcessResult:
    """Outputs of a finished processing job."""

    processed_file_path: str
    thumbnail_path: str
    duration_seconds: int
    metadata: dict[str, Any] | None = None


class VideoProcessor(ABC):
    """Abstract base class for video processing providers.

    Implementations:
    - StubVideoProcessor: waits a fixed delay and fabricates outputs
    - FFmpegProcessor: transcodes and extracts a thumbnail (future)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @property
    @abstractmethod
    def expected_seconds(self) -> float:
        """Rough time one job takes, used for ETA estimates."""
        ...

    @abstractmethod
    async def process(self, request: ProcessRequest) -> ProcessResult:
        """Process a raw upload.

        Args:
            request: Which video to process and where its raw file lives

        Returns:
            ProcessResult with the processed file, thumbnail and duration
        """
        ...

    async def health_check(self) -> bool:
        """Check if the processor is available and healthy."""
        return True
