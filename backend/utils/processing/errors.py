"""
Batch-level processing errors.

Only these escape ``ItemProcessor.process_all()``. Failures of a single item
never do; they just leave that item out of the result.
"""


class ProcessingError(Exception):
    """Base class for a batch run that could not produce a result"""


class ProcessingTimeout(ProcessingError):
    """The aggregate deadline passed before every item finished"""


class ProcessingInterrupted(ProcessingError):
    """Waiting for the batch was cancelled from outside"""


class ProcessingExecutionFailure(ProcessingError):
    """The pool machinery itself failed (closed pool, id listing error, crashed task)"""
