"""
Result types for batch processing.

Two tiers:
- TaskResult describes what happened to one item (success, absent or error)
- BatchResult describes the whole run (completed, timeout, interrupted or
  execution error)

Per-item errors stay inside TaskResult and are filtered out. Only a
non-completed BatchResult turns into an exception, in ``BatchResult.unwrap()``.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from utils.item_utils import Item
from .errors import (
    ProcessingError,
    ProcessingTimeout,
    ProcessingInterrupted,
    ProcessingExecutionFailure,
)


class TaskOutcome(str, Enum):
    SUCCESS = "success"
    ABSENT = "absent"
    ERROR = "error"


@dataclass(frozen=True)
class TaskResult:
    """Outcome of processing a single item id"""
    item_id: int
    outcome: TaskOutcome
    item: Optional[Item] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, item_id: int, item: Item) -> "TaskResult":
        return cls(item_id=item_id, outcome=TaskOutcome.SUCCESS, item=item)

    @classmethod
    def absent(cls, item_id: int) -> "TaskResult":
        return cls(item_id=item_id, outcome=TaskOutcome.ABSENT)

    @classmethod
    def failure(cls, item_id: int, error: Exception) -> "TaskResult":
        return cls(item_id=item_id, outcome=TaskOutcome.ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome is TaskOutcome.SUCCESS and self.item is not None


class BatchOutcome(str, Enum):
    COMPLETED = "completed"
    TIMEOUT = "timeout"
    INTERRUPTED = "interrupted"
    EXECUTION_ERROR = "execution_error"


_ERRORS_BY_OUTCOME = {
    BatchOutcome.TIMEOUT: ProcessingTimeout,
    BatchOutcome.INTERRUPTED: ProcessingInterrupted,
    BatchOutcome.EXECUTION_ERROR: ProcessingExecutionFailure,
}


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of one ``process_all`` run.

    Attributes:
        outcome: How the run ended
        items: Successfully processed items in completion order (COMPLETED only)
        submitted: Number of per-item tasks handed to the pool
        skipped: Number of tasks that finished absent or with an error
        message: Human readable reason for a non-completed run
        error: Underlying cause, if any
    """
    outcome: BatchOutcome
    items: List[Item] = field(default_factory=list)
    submitted: int = 0
    skipped: int = 0
    message: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def completed(cls, items: List[Item], submitted: int, skipped: int) -> "BatchResult":
        return cls(BatchOutcome.COMPLETED, items=items, submitted=submitted, skipped=skipped)

    @classmethod
    def timed_out(cls, submitted: int, timeout: float) -> "BatchResult":
        return cls(BatchOutcome.TIMEOUT, submitted=submitted, message="Processing timed out",
                   error=TimeoutError(f"Batch did not finish within {timeout}s"))

    @classmethod
    def interrupted(cls, submitted: int, error: BaseException) -> "BatchResult":
        return cls(BatchOutcome.INTERRUPTED, submitted=submitted,
                   message="Processing was interrupted", error=error)

    @classmethod
    def execution_error(cls, submitted: int, error: BaseException) -> "BatchResult":
        return cls(BatchOutcome.EXECUTION_ERROR, submitted=submitted,
                   message="Error during item processing", error=error)

    def unwrap(self) -> List[Item]:
        """
        Return the processed items, or raise the ProcessingError matching the outcome.

        Raises:
            ProcessingTimeout, ProcessingInterrupted, ProcessingExecutionFailure
        """
        if self.outcome is BatchOutcome.COMPLETED:
            return list(self.items)
        error_cls = _ERRORS_BY_OUTCOME.get(self.outcome, ProcessingError)
        raise error_cls(self.message) from self.error
