import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()


class Task(BaseModel):
    """Represents a unit of background work."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    func: Callable[..., Awaitable[Any]]
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)


class TaskQueue:
    """Simple in-memory queue with asyncio workers for fire-and-forget work."""

    def __init__(self, maxsize: int = 0):
        self.queue: asyncio.Queue[Task] = asyncio.Queue(maxsize=maxsize)
        self.workers: list[asyncio.Task[None]] = []
        self.running = False

    async def enqueue(self, func: Callable[..., Awaitable[Any]], name: str, *args: Any, **kwargs: Any) -> bool:
        """
        Schedule ``func(*args, **kwargs)`` on a worker.

        Returns immediately; the outcome is only logged by the worker.
        Returns False when the queue is bounded and full.
        """
        task = Task(name=name, func=func, args=args, kwargs=kwargs)
        try:
            self.queue.put_nowait(task)
        except asyncio.QueueFull:
            logger.warning("task_queue_full", task=name, size=self.queue.qsize())
            return False

        logger.debug("task_enqueued", task=name, size=self.queue.qsize())
        return True

    async def start_workers(self, num_workers: int = 3) -> None:
        """Start background workers."""
        if self.running:
            return
        self.running = True
        for i in range(num_workers):
            worker = asyncio.create_task(self._worker(f"worker-{i}"))
            self.workers.append(worker)
        logger.info("task_workers_started", count=num_workers)

    async def stop_workers(self, drain_timeout: float = 5.0) -> None:
        """
        Stop background workers.

        Pending tasks get up to ``drain_timeout`` seconds to finish first;
        whatever is still queued after that is dropped and logged.
        """
        if self.workers:
            try:
                await asyncio.wait_for(self.queue.join(), timeout=drain_timeout)
            except asyncio.TimeoutError:
                logger.warning("task_queue_drain_timeout", timeout=drain_timeout)

        self.running = False
        for worker in self.workers:
            worker.cancel()
        await asyncio.gather(*self.workers, return_exceptions=True)
        self.workers.clear()

        if not self.queue.empty():
            logger.warning("task_queue_dropped", size=self.queue.qsize())
        logger.info("task_workers_stopped")

    async def join(self) -> None:
        """Wait until every enqueued task has been processed."""
        await self.queue.join()

    async def _worker(self, worker_name: str) -> None:
        """Background worker that processes tasks."""
        while self.running:
            task = await self.queue.get()
            try:
                await self._process_task(task, worker_name)
            finally:
                self.queue.task_done()

    async def _process_task(self, task: Task, worker_name: str) -> None:
        """Process a single task. Failures are logged, never re-raised."""
        waited_ms = int((datetime.now() - task.created_at).total_seconds() * 1000)
        logger.debug("task_started", task=task.name, worker=worker_name, queue_latency_ms=waited_ms)
        try:
            await task.func(*task.args, **task.kwargs)
        except Exception as e:
            logger.error("task_failed", task=task.name, worker=worker_name, error=str(e), exc_info=True)
