"""Retry/backoff loop for operations that can fail transiently."""

from __future__ import annotations

import asyncio
import logging as py_logging
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from saferemove.config import RetryPolicy
from saferemove.errors import ErrorKind

T = TypeVar("T")

logger = py_logging.getLogger(__name__)


class TraceSink(Protocol):
    def __call__(self, message: str) -> None: ...


def _log_trace(message: str) -> None:
    logger.debug("%s", message)


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    classify: Callable[[Exception], ErrorKind],
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    trace: TraceSink | None = None,
) -> T:
    """Await ``operation`` until it succeeds, fails fatally, or attempts run out.

    ``classify`` decides which failures are worth another attempt. Transient
    failures are retried after ``initial_delay_ms * 2**attempt`` milliseconds.
    Fatal failures and the last transient failure are re-raised unchanged.
    A failing trace sink is logged and otherwise ignored.
    """
    policy = policy or RetryPolicy()
    emit = trace or _log_trace
    last_error: Exception | None = None

    for attempt in range(policy.max_attempts):
        try:
            return await operation()
        except Exception as exc:
            if classify(exc) is not ErrorKind.TRANSIENT:
                raise
            last_error = exc
            if attempt + 1 >= policy.max_attempts:
                break
            delay_ms = policy.delay_ms(attempt)
            try:
                emit(
                    f"retry attempt={attempt + 1}/{policy.max_attempts} "
                    f"delay_ms={delay_ms:g} error={exc}"
                )
            except Exception:
                logger.debug("retry trace sink failed attempt=%d", attempt + 1, exc_info=True)
            await sleep(policy.delay_seconds(attempt))

    if last_error is not None:
        raise last_error
    raise RuntimeError("Retry policy exhausted without executing operation.")
