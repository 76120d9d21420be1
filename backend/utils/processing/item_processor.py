"""
Batch item processor.

Moves every stored item to PROCESSED concurrently:

1. Snapshot all item ids from the store
2. Submit one task per id to the shared WorkerPool
3. Each task waits a short delay, loads the item, sets PROCESSED and saves it
4. Wait for all tasks with one aggregate deadline
5. Keep the items that were saved, drop absent or failed ones

A single item failing or disappearing never fails the batch. The batch as a
whole fails only when the deadline passes, the wait is cancelled, or the pool
itself breaks. Items saved before such a failure stay saved (no rollback), and
tasks still running when the deadline passes are not cancelled.

Note: an empty result does not tell "no items" apart from "every item failed".
"""
import asyncio
from dataclasses import replace
from typing import List

from config import PROCESSING_ITEM_DELAY_SECONDS, PROCESSING_TIMEOUT_SECONDS
from utils.item_utils import Item, ItemStatus, ItemStore
from utils.logger import logger
from .results import BatchResult, TaskResult
from .worker_pool import WorkerPool


class ItemProcessor:
    """
    Runs batch status transitions over every item in a store.

    Args:
        store: Item store (find_by_id, save, find_all_ids are used)
        pool: Shared worker pool the per-item tasks run on
        timeout: Aggregate deadline in seconds, counted after the last task is submitted
        item_delay: Delay in seconds each task waits before touching the store
    """

    def __init__(
        self,
        store: ItemStore,
        pool: WorkerPool,
        timeout: float = PROCESSING_TIMEOUT_SECONDS,
        item_delay: float = PROCESSING_ITEM_DELAY_SECONDS
    ):
        self.store = store
        self.pool = pool
        self.timeout = timeout
        self.item_delay = item_delay

    async def process_item(self, item_id: int) -> TaskResult:
        """
        Process a single item: wait, load, mark PROCESSED, save.

        Store errors are returned as an ERROR result instead of being raised.
        """
        try:
            # Simulated processing cost
            await asyncio.sleep(self.item_delay)

            item = await self.store.find_by_id(item_id)
            if item is None:
                return TaskResult.absent(item_id)

            saved = await self.store.save(replace(item, status=ItemStatus.PROCESSED))
            return TaskResult.success(item_id, saved)
        except Exception as e:
            logger.warning(f"Error processing item with ID {item_id}: {e}")
            return TaskResult.failure(item_id, e)

    async def run_batch(self) -> BatchResult:
        """
        Process every item id the store knows about right now.

        Returns:
            BatchResult describing how the run ended. Never raises for
            timeouts, cancellation or pool failures; those become the
            corresponding outcome.
        """
        tasks = []
        try:
            item_ids = await self.store.find_all_ids()
            for item_id in item_ids:
                tasks.append(self.pool.submit(self.process_item, item_id))
        except Exception as e:
            logger.error(f"Could not start batch after {len(tasks)} task(s): {e}")
            return BatchResult.execution_error(len(tasks), e)

        logger.info(f"Processing {len(tasks)} item(s) on {self.pool.size} worker(s)")

        processed: List[Item] = []
        skipped = 0
        try:
            # as_completed yields in completion order and leaves unfinished tasks running on timeout
            for next_done in asyncio.as_completed(tasks, timeout=self.timeout):
                task_result = await next_done
                if task_result.ok:
                    processed.append(task_result.item)
                else:
                    skipped += 1
        except asyncio.TimeoutError:
            unfinished = sum(1 for task in tasks if not task.done())
            logger.error(
                f"Batch timed out after {self.timeout}s with {unfinished} of {len(tasks)} item(s) unfinished"
            )
            return BatchResult.timed_out(len(tasks), self.timeout)
        except asyncio.CancelledError as e:
            # Cancelling the wait is reported as INTERRUPTED, not re-raised; the caller's
            # cancellation ends here and process_all raises ProcessingInterrupted instead
            logger.error("Batch processing was interrupted")
            return BatchResult.interrupted(len(tasks), e)
        except Exception as e:
            logger.error(f"Batch processing failed: {e}", exc_info=True)
            return BatchResult.execution_error(len(tasks), e)

        logger.info(f"Processed {len(processed)} of {len(tasks)} item(s), skipped {skipped}")
        return BatchResult.completed(processed, len(tasks), skipped)

    async def process_all(self) -> List[Item]:
        """
        Process every item and return the ones that were saved as PROCESSED.

        Returns:
            Processed items in completion order

        Raises:
            ProcessingTimeout: The aggregate deadline passed
            ProcessingInterrupted: The wait was cancelled
            ProcessingExecutionFailure: The pool or id listing failed
        """
        result = await self.run_batch()
        return result.unwrap()
