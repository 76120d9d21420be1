"""
Batch processing utilities for moving every item to PROCESSED
"""
from .errors import (
    ProcessingError,
    ProcessingTimeout,
    ProcessingInterrupted,
    ProcessingExecutionFailure,
)
from .results import TaskOutcome, TaskResult, BatchOutcome, BatchResult
from .worker_pool import WorkerPool, WorkerPoolClosed
from .item_processor import ItemProcessor

__all__ = [
    'ProcessingError',
    'ProcessingTimeout',
    'ProcessingInterrupted',
    'ProcessingExecutionFailure',
    'TaskOutcome',
    'TaskResult',
    'BatchOutcome',
    'BatchResult',
    'WorkerPool',
    'WorkerPoolClosed',
    'ItemProcessor',
]
