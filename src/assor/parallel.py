"""Parallel evaluation of independent sites with joblib."""

import logging
import os
from collections.abc import Callable, Sequence
from typing import Any

from joblib import Parallel, delayed

logger = logging.getLogger(__name__)


class ParallelProcessor:
    """Maps a pure function over items, serially or with a joblib pool."""

    def __init__(self, n_jobs: int = 1, backend: str = "loky", batch_size: int | str = "auto"):
        """
        Initialize parallel processor.

        Args:
            n_jobs: Number of parallel jobs (-1 for all CPUs, 1 runs in-process)
            backend: joblib backend ('loky', 'threading', 'multiprocessing')
            batch_size: Items dispatched to a worker at once
        """
        self.n_jobs = n_jobs if n_jobs > 0 else (os.cpu_count() or 1)
        self.backend = backend
        self.batch_size = batch_size

    def map(self, func: Callable, items: Sequence[Any]) -> list[Any]:
        """
        Apply ``func`` to every item, preserving input order.

        Args:
            func: Picklable function of one argument
            items: Items to process

        Returns:
            List of results
        """
        if self.n_jobs == 1 or len(items) < 2:
            return [func(item) for item in items]

        logger.debug("Dispatching %d items to %d %s workers", len(items), self.n_jobs, self.backend)
        return Parallel(n_jobs=self.n_jobs, backend=self.backend, batch_size=self.batch_size)(
            delayed(func)(item) for item in items
        )
