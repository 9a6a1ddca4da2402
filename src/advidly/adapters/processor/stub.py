"""Stub video processor that simulates transcoding."""

import asyncio
import random

from advidly.adapters.processor.base import ProcessRequest, ProcessResult, VideoProcessor
from advidly.logging import get_logger

logger = get_logger(__name__)


class StubVideoProcessor(VideoProcessor):
    """Waits a fixed delay, then reports fabricated outputs.

    No file is produced: the processed and thumbnail paths are derived from the
    raw path, and the duration is drawn between one and eleven minutes.
    """

    def __init__(self, delay_seconds: float = 10.0, rng: random.Random | None = None) -> None:
        self.delay_seconds = delay_seconds
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return "stub"

    @property
    def expected_seconds(self) -> float:
        return self.delay_seconds

    async def process(self, request: ProcessRequest) -> ProcessResult:
        """Simulate processing with a delay."""
        logger.info("stub_processing_started", video_id=request.video_id)

        await asyncio.sleep(self.delay_seconds)

        result = ProcessResult(
            processed_file_path=f"{request.raw_file_path}-processed",
            thumbnail_path=f"{request.raw_file_path}-thumbnail",
            duration_seconds=self._rng.randrange(60, 660),
            metadata={"provider": self.name},
        )

        logger.info(
            "stub_processing_completed",
            video_id=request.video_id,
            duration_seconds=result.duration_seconds,
        )
        return result
