"""FastAPI dependencies for the item API.

Dependency injection functions for route handlers. Tests replace these via
``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from utils.item_utils import ItemStore
from utils.processing import ItemProcessor, ProcessingExecutionFailure, WorkerPool


def get_item_store() -> ItemStore:
    """Get the item store (stateless, one connection per call)."""
    return ItemStore()


def get_worker_pool(request: Request) -> WorkerPool:
    """Get the shared worker pool from app state.

    Raises:
        ProcessingExecutionFailure: If the application was started without
            its lifespan, so no pool exists.
    """
    pool = getattr(request.app.state, "worker_pool", None)
    if pool is None:
        raise ProcessingExecutionFailure("Worker pool is not running")
    return pool


def get_item_processor(
    store: ItemStore = Depends(get_item_store),
    pool: WorkerPool = Depends(get_worker_pool),
) -> ItemProcessor:
    """Build a processor bound to the shared pool."""
    return ItemProcessor(store, pool)
