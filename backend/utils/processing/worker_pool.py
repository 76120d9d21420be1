"""
Process-wide bounded worker pool for per-item tasks.

The pool is created once when the application starts (see ``main.lifespan``)
and shared by every batch run. At most ``size`` tasks run at the same time;
the rest wait on the pool's semaphore.

Tasks are never cancelled by the caller that submitted them. A batch that
stops waiting (timeout) leaves its tasks running; they stay tracked here until
they finish, so ``shutdown()`` can drain them.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional, Set

from utils.logger import logger


class WorkerPoolClosed(RuntimeError):
    """Raised when work is submitted after shutdown() was called"""


class WorkerPool:
    """Fixed-size pool of asyncio tasks"""

    def __init__(self, size: int):
        if size < 1:
            raise ValueError("Worker pool size must be at least 1")
        self.size = size
        self._semaphore = asyncio.Semaphore(size)
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_flight(self) -> int:
        """Number of submitted tasks that have not finished yet"""
        return len(self._tasks)

    async def _run(self, fn: Callable[..., Awaitable[Any]], args: tuple) -> Any:
        async with self._semaphore:
            return await fn(*args)

    def submit(self, fn: Callable[..., Awaitable[Any]], *args: Any) -> asyncio.Task:
        """
        Schedule ``fn(*args)`` on the pool.

        Must be called from inside a running event loop.

        Returns:
            The asyncio.Task wrapping the call

        Raises:
            WorkerPoolClosed: If the pool has been shut down
        """
        if self._closed:
            raise WorkerPoolClosed("Worker pool is shut down")
        task = asyncio.create_task(self._run(fn, args))
        # Hold a strong reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def shutdown(self, timeout: Optional[float] = None) -> None:
        """
        Stop accepting work and wait for in-flight tasks.

        Args:
            timeout: Seconds to wait for running tasks. Tasks still running
                afterwards are cancelled. None waits indefinitely.
        """
        self._closed = True
        pending = set(self._tasks)
        if not pending:
            return

        logger.info(f"Draining {len(pending)} in-flight task(s) from worker pool")
        _, still_running = await asyncio.wait(pending, timeout=timeout)
        if still_running:
            logger.warning(f"Cancelling {len(still_running)} task(s) still running after {timeout}s")
            for task in still_running:
                task.cancel()
            await asyncio.gather(*still_running, return_exceptions=True)
