"""Hooks a running test registers for itself (finish and failure callbacks).

Registrations are keyed by the :class:`ExecutionToken` of the attempt that is
currently executing. The executor opens a token before running an attempt and
closes it right after, so calls made outside an attempt, or late calls made by
abandoned (timed-out) work, are rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from specrun.context.context import CURRENT_TOKEN, ExecutionToken
from specrun.errors import UsageError, describe_error
from specrun.timeout import invoke

if TYPE_CHECKING:
    from specrun.testing.result import TestResult


logger = logging.getLogger(__name__)

TestHook = Callable[["TestResult"], Any]


@dataclass
class _RegisteredHooks:
    finished: list[TestHook] = field(default_factory=list)
    failed: list[TestHook] = field(default_factory=list)


class TestHookRegistry:
    """Maps open execution tokens to the hooks registered during that attempt."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    def __init__(self) -> None:
        self._hooks: dict[ExecutionToken, _RegisteredHooks] = {}

    def open(self, full_name: str, attempt: int = 1) -> ExecutionToken:
        """Create a fresh token and start accepting hooks for it."""
        execution = ExecutionToken(full_name=full_name, attempt=attempt)
        self._hooks[execution] = _RegisteredHooks()
        return execution

    def is_open(self, execution: ExecutionToken) -> bool:
        return execution in self._hooks

    def register_finished(self, fn: TestHook) -> TestHook:
        self._current("on_test_finished").finished.append(fn)
        return fn

    def register_failed(self, fn: TestHook) -> TestHook:
        self._current("on_test_failed").failed.append(fn)
        return fn

    def hooks_for(self, execution: ExecutionToken) -> tuple[list[TestHook], list[TestHook]]:
        """Return copies of the ``(finished, failed)`` hooks of an open token."""
        hooks = self._hooks.get(execution)
        if hooks is None:
            return [], []
        return list(hooks.finished), list(hooks.failed)

    def close(self, execution: ExecutionToken) -> tuple[list[TestHook], list[TestHook]]:
        """Stop accepting hooks for ``execution`` and return its ``(finished, failed)`` hooks."""
        hooks = self._hooks.pop(execution, None)
        if hooks is None:
            return [], []
        return hooks.finished, hooks.failed

    async def dispatch(self, finished: list[TestHook], failed: list[TestHook], result: TestResult) -> None:
        """Run collected hooks against a test's final result.

        Failure hooks run first and only for a failed result; finish hooks
        always run. Each list runs most-recently-registered first. A hook that
        raises is logged and does not stop the others.
        """
        if result.status.is_failure:
            await self._run_all(failed, result, "on_test_failed")
        await self._run_all(finished, result, "on_test_finished")

    async def drain(self, execution: ExecutionToken, result: TestResult) -> None:
        """Close the token and run its hooks against ``result``."""
        finished, failed = self.close(execution)
        await self.dispatch(finished, failed, result)

    def reset(self) -> None:
        """Forget every open token."""
        self._hooks.clear()

    def _current(self, caller: str) -> _RegisteredHooks:
        execution = CURRENT_TOKEN.get()
        hooks = self._hooks.get(execution) if execution is not None else None
        if hooks is None:
            msg = f"{caller} can only be called during test execution"
            raise UsageError(msg)
        return hooks

    @staticmethod
    async def _run_all(hooks: list[TestHook], result: TestResult, kind: str) -> None:
        for hook in reversed(hooks):
            try:
                await invoke(hook, result)
            except Exception as exc:
                logger.warning("%s hook failed for %r: %s", kind, result.full_name, describe_error(exc))


_default_registry = TestHookRegistry()


def get_test_hook_registry() -> TestHookRegistry:
    """Get the registry used by :func:`on_test_finished` and :func:`on_test_failed`."""
    return _default_registry


def on_test_finished(fn: TestHook) -> TestHook:
    """Run ``fn(result)`` once the current test attempt concludes, pass or fail.

    Usable as a plain call or as a decorator inside a test body.
    """
    return _default_registry.register_finished(fn)


def on_test_failed(fn: TestHook) -> TestHook:
    """Run ``fn(result)`` only if the current test attempt fails."""
    return _default_registry.register_failed(fn)


__all__ = [
    "TestHook",
    "TestHookRegistry",
    "get_test_hook_registry",
    "on_test_failed",
    "on_test_finished",
]
