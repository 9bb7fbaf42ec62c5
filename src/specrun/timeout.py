"""Deadline handling for tests and hooks.

Work is raced against a timer. When the timer wins, the caller stops waiting
but the work itself is not interrupted: a timed-out coroutine keeps running on
the event loop and whatever it eventually returns or raises is discarded.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from specrun.errors import TestTimeoutError


logger = logging.getLogger(__name__)

T = TypeVar("T")


async def invoke(fn: Callable[..., Any], *args: Any) -> Any:
    """Call a sync or async callable and await its result when needed."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _discard_late_result(task: asyncio.Future[Any]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned work finished late with %s: %s", type(exc).__name__, exc)


async def run_with_timeout(
    work: Callable[[], Awaitable[T]],
    timeout_ms: int | None,
    *,
    label: str = "Test",
) -> T:
    """Await ``work()`` for at most ``timeout_ms`` milliseconds.

    The work runs as its own task, which copies the caller's context
    variables at creation time.

    Raises:
        TestTimeoutError: If the deadline passes first. The task is left running.
    """
    task = asyncio.ensure_future(work())
    if timeout_ms is None:
        return await task

    done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
    if task in done:
        return task.result()

    task.add_done_callback(_discard_late_result)
    raise TestTimeoutError(timeout_ms, label)


__all__ = ["invoke", "run_with_timeout"]
