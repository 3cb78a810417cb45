"""
Utility modules for assor.

Provides logging, timing, and error reporting.
"""

from .errors import AssorError, RawDataError, display_error
from .logging import log_call, setup_logging, timed

__all__ = [
    "AssorError",
    "RawDataError",
    "display_error",
    "log_call",
    "setup_logging",
    "timed",
]
