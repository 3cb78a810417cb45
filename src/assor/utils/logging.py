"""
Logging utilities for assor.

Log records go through the standard logging module and are rendered on
stderr by rich, leaving stdout free for results.
"""

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "console",
    "log_call",
    "setup_logging",
    "timed",
]

console = Console(stderr=True)


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: str | None = None) -> None:
    """
    Configure logging for assor.

    Args:
        verbose: Log at DEBUG instead of INFO.
        quiet: Only log warnings and errors. Ignored when ``verbose`` is set.
        log_file: Optional path to also write plain-text logs to.
    """
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


@contextmanager
def timed(operation: str, logger: logging.Logger | None = None) -> Iterator[None]:
    """
    Log how long the wrapped block took.

    Example:
        with timed("Annotating records", logger):
            pipeline.run()
    """
    log = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    log.debug("Starting: %s", operation)
    try:
        yield
    finally:
        log.debug("Completed: %s (%.3fs)", operation, time.perf_counter() - start)


def log_call(logger: logging.Logger | None = None) -> Callable:
    """Decorator logging entry, duration and failure of a function."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = logger or logging.getLogger(func.__module__)
            log.debug("Calling %s", func.__name__)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error("%s failed: %s", func.__name__, e)
                raise
            log.debug("%s completed (%.3fs)", func.__name__, time.perf_counter() - start)
            return result

        return wrapper

    return decorator
