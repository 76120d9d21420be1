import os
from typing import Optional


def pick_pool_size(override: Optional[int] = None) -> int:
    """
    Decide how many per-item tasks may run at the same time.

    The batch processor spends most of its time waiting on the store and on
    its simulated delay, so it benefits from parallelism, but running more
    tasks than there are CPUs just makes them compete for the same cores
    and for SQLite's write lock.

    The Rule:
    - An explicit override (PROCESSING_POOL_SIZE) always wins
    - Otherwise use the CPU count (fallback to 4 if detection fails)
    - Never go below 1

    Example:
    - 12 CPU cores, no override → 12 workers
    - override 2 → 2 workers
    - override 0 → 1 worker

    Returns:
        int: Number of workers for the shared WorkerPool
    """
    if override is not None:
        return max(1, override)

    cpu_count = os.cpu_count() or 4
    return max(1, cpu_count)
