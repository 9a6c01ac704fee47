"""
In-process notification queue.

Request handlers enqueue notification jobs after their mutation has been
flushed; a single consumer task awaits them one at a time. A failing job is
logged and dropped so it can never reach the request that queued it.

Usage:
    queue = NotificationQueue()
    await queue.start()
    queue.enqueue("application_confirmation", dispatcher.send_application_confirmation,
                  candidate, posting)
    ...
    await queue.stop()
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class NotificationJob:
    """A queued coroutine call."""

    label: str
    func: Callable[..., Awaitable[Any]]
    args: tuple = ()
    kwargs: dict = field(default_factory=dict)


class NotificationQueue:
    """Single-consumer asyncio queue for fire-and-forget notifications."""

    def __init__(self, maxsize: int = 0):
        """
        Initialize the queue.

        Args:
            maxsize: Queue capacity; 0 means unbounded
        """
        self._maxsize = maxsize
        self._queue: Optional[asyncio.Queue[NotificationJob]] = None
        self._consumer: Optional[asyncio.Task] = None
        self.processed = 0
        self.failed = 0

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._consumer.done()

    async def start(self) -> None:
        """Start the consumer task on the running event loop."""
        if self.running:
            return
        self._queue = asyncio.Queue(maxsize=self._maxsize)
        self._consumer = asyncio.create_task(self._consume(), name="notification-queue")
        logger.info("Notification queue started")

    async def stop(self, drain: bool = True) -> None:
        """
        Stop the consumer.

        Args:
            drain: Wait for queued jobs to finish before stopping
        """
        if not self.running:
            return
        if drain:
            await self.join()
        self._consumer.cancel()
        try:
            await self._consumer
        except asyncio.CancelledError:
            pass
        self._consumer = None
        logger.info(
            f"Notification queue stopped ({self.processed} processed, {self.failed} failed)"
        )

    def enqueue(
        self,
        label: str,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> bool:
        """
        Queue a notification coroutine without waiting for it.

        Returns:
            True if queued, False if the queue is not running or full
        """
        if not self.running:
            logger.warning(f"Notification queue not running, dropping {label}")
            return False
        try:
            self._queue.put_nowait(NotificationJob(label, func, args, kwargs))
        except asyncio.QueueFull:
            logger.warning(f"Notification queue full, dropping {label}")
            return False
        return True

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        if self._queue is not None:
            await self._queue.join()

    async def _consume(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await job.func(*job.args, **job.kwargs)
                self.processed += 1
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.failed += 1
                logger.warning(f"Notification {job.label} failed: {e}")
            finally:
                self._queue.task_done()
