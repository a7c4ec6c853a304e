"""Recursive directory removal that retries through transient file locks."""

from .config import RemovalOptions, RetryPolicy
from .errors import ErrorKind
from .fs import classify_os_error, remove_directory_with_retry, remove_path, retry_with_backoff
from .retry import TraceSink, run_with_retry

__version__ = "0.1.0"

__all__ = [
    "classify_os_error",
    "ErrorKind",
    "RemovalOptions",
    "remove_directory_with_retry",
    "remove_path",
    "retry_with_backoff",
    "RetryPolicy",
    "run_with_retry",
    "TraceSink",
]
