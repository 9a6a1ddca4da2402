"""Background processing queue for uploaded videos."""

import asyncio

from advidly.adapters.processor.base import ProcessRequest, VideoProcessor
from advidly.db.storage import MemStorage, NotFoundError
from advidly.domain.enums import VideoStatus
from advidly.domain.models import Video
from advidly.domain.patches import VideoPatch
from advidly.logging import get_logger

logger = get_logger(__name__)


class ProcessingQueue:
    """Runs one processing job per video as an asyncio task.

    When a job finishes, a video still in ``processing`` is marked ``ready``
    together with the processor's outputs; any other status is left alone. Jobs can be cancelled individually (a video deleted
    mid-processing) or all at once on shutdown.
    """

    def __init__(self, storage: MemStorage, processor: VideoProcessor) -> None:
        self.storage = storage
        self.processor = processor
        self._jobs: dict[int, asyncio.Task[None]] = {}

    @property
    def pending(self) -> list[int]:
        """Ids of videos whose job has not finished yet."""
        return [video_id for video_id, task in self._jobs.items() if not task.done()]

    def enqueue(self, video: Video) -> asyncio.Task[None]:
        """Start processing a video. Must be called from a running event loop."""
        self.cancel(video.id)
        task = asyncio.create_task(self._run(video.id, video.raw_file_path))
        self._jobs[video.id] = task
        task.add_done_callback(lambda t, video_id=video.id: self._forget(video_id, t))
        logger.info("processing_enqueued", video_id=video.id, processor=self.processor.name)
        return task

    def cancel(self, video_id: int) -> bool:
        """Cancel a pending job. Returns True if one was running."""
        task = self._jobs.pop(video_id, None)
        if task is None or task.done():
            return False
        task.cancel()
        logger.info("processing_cancelled", video_id=video_id)
        return True

    async def shutdown(self) -> None:
        """Cancel every pending job and wait for them to unwind."""
        tasks = list(self._jobs.values())
        self._jobs.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("processing_queue_stopped", cancelled=len(tasks))

    def _forget(self, video_id: int, task: asyncio.Task[None]) -> None:
        if self._jobs.get(video_id) is task:
            del self._jobs[video_id]

    async def _run(self, video_id: int, raw_file_path: str) -> None:
        try:
            result = await self.processor.process(
                ProcessRequest(video_id=video_id, raw_file_path=raw_file_path)
            )
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("processing_failed", video_id=video_id)
            return

        video = self.storage.get_video(video_id)
        if video is None:
            logger.warning("processing_video_missing", video_id=video_id)
            return
        if video.status != VideoStatus.PROCESSING:
            # Status only moves forward; never pull a video back to ready
            logger.warning(
                "processing_result_skipped", video_id=video_id, status=video.status
            )
            return

        try:
            self.storage.update_video(
                video_id,
                VideoPatch(
                    status=VideoStatus.READY,
                    processed_file_path=result.processed_file_path,
                    thumbnail_path=result.thumbnail_path,
                    duration=result.duration_seconds,
                ),
            )
        except NotFoundError:
            logger.warning("processing_video_missing", video_id=video_id)
            return

        logger.info("video_ready", video_id=video_id, duration=result.duration_seconds)
