"""Filesystem removal with retries for lock contention."""

from __future__ import annotations

import asyncio
import errno
import logging as py_logging
import os
import shutil
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, TypeVar

from saferemove.config import DEFAULT_INITIAL_DELAY_MS, DEFAULT_MAX_ATTEMPTS, RemovalOptions, RetryPolicy
from saferemove.errors import ErrorKind
from saferemove.retry import TraceSink, run_with_retry

T = TypeVar("T")

logger = py_logging.getLogger(__name__)

TRANSIENT_ERRNOS = frozenset({errno.EBUSY, errno.ENOTEMPTY, errno.EPERM})
# ERROR_SHARING_VIOLATION, ERROR_LOCK_VIOLATION; Windows reports these with errno EACCES.
TRANSIENT_WINERRORS = frozenset({32, 33})


class PathRemover(Protocol):
    def __call__(self, path: str | Path, **options: Any) -> Awaitable[None]: ...


def classify_os_error(exc: Exception) -> ErrorKind:
    """Map lock/contention errno values to ``TRANSIENT``, everything else to ``FATAL``."""
    if not isinstance(exc, OSError):
        return ErrorKind.FATAL
    if exc.errno in TRANSIENT_ERRNOS or getattr(exc, "winerror", None) in TRANSIENT_WINERRORS:
        return ErrorKind.TRANSIENT
    return ErrorKind.FATAL


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    initial_delay_ms: float = DEFAULT_INITIAL_DELAY_MS,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    trace: TraceSink | None = None,
) -> T:
    policy = RetryPolicy(max_attempts=max_attempts, initial_delay_ms=initial_delay_ms)
    return await run_with_retry(
        operation,
        policy=policy,
        classify=classify_os_error,
        sleep=sleep,
        trace=trace,
    )


def _remove_sync(path: Path, *, recursive: bool, force: bool, **rmtree_kwargs: Any) -> None:
    if not os.path.lexists(path):
        if force:
            return
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
    if path.is_dir() and not path.is_symlink():
        if not recursive:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), str(path))
        try:
            shutil.rmtree(path, **rmtree_kwargs)
        except FileNotFoundError:
            if not force:
                raise
            # Something else removed part of the tree mid-walk.
            if os.path.lexists(path):
                _remove_sync(path, recursive=recursive, force=force, **rmtree_kwargs)
        return
    try:
        os.unlink(path)
    except FileNotFoundError:
        if not force:
            raise


async def remove_path(
    path: str | Path,
    *,
    recursive: bool = False,
    force: bool = False,
    **rmtree_kwargs: Any,
) -> None:
    """Remove a file or directory on a worker thread.

    With ``force`` a missing path is not an error. Directories need
    ``recursive``; extra keyword arguments go to :func:`shutil.rmtree`.
    """
    await asyncio.to_thread(
        _remove_sync,
        Path(path),
        recursive=recursive,
        force=force,
        **rmtree_kwargs,
    )


async def remove_directory_with_retry(
    path: str | Path,
    options: Mapping[str, Any] | None = None,
    *,
    remover: PathRemover = remove_path,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    trace: TraceSink | None = None,
) -> None:
    """Recursively force-remove ``path``, retrying while the OS reports it locked.

    On Windows a handle can stay open briefly after a copy or rename, so the
    first delete may fail with EBUSY. Five attempts are made, 100ms apart
    initially and doubling each time.
    """
    kwargs = RemovalOptions.model_validate(dict(options or {})).as_kwargs()

    async def _attempt() -> None:
        await remover(path, **kwargs)

    await retry_with_backoff(
        _attempt,
        DEFAULT_MAX_ATTEMPTS,
        DEFAULT_INITIAL_DELAY_MS,
        sleep=sleep,
        trace=trace,
    )
    logger.debug("removed path=%s", path)
