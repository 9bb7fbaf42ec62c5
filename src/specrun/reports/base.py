"""Base reporter protocol for specrun test output."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from specrun.testing.result import RunResult, TestResult


class Reporter(Protocol):
    """Protocol defining the interface for test reporters.

    All methods are async to support I/O-bound reporters (file output, network, etc.).
    Callbacks arrive in execution order: run start, then per module file start,
    suite start, test start/end pairs, suite end, file end, and finally run complete.
    """

    async def on_run_start(self) -> None:
        """Called once before the first module is loaded."""
        ...

    async def on_file_start(self, path: Path) -> None:
        """Called before a test module is loaded."""
        ...

    async def on_file_error(self, path: Path, error: BaseException) -> None:
        """Called when a test module fails to load; its tests never run."""
        ...

    async def on_suite_start(self, full_name: str) -> None:
        """Called when the walker enters a suite."""
        ...

    async def on_test_start(self, full_name: str) -> None:
        """Called before a test is executed (or recorded as skipped/todo)."""
        ...

    async def on_test_end(self, result: TestResult) -> None:
        """Called with the final result of each test."""
        ...

    async def on_suite_end(self, full_name: str) -> None:
        """Called when the walker leaves a suite."""
        ...

    async def on_file_end(self, path: Path) -> None:
        """Called after every suite of a module has been walked."""
        ...

    async def on_run_complete(self, run_result: RunResult) -> None:
        """Called after all modules complete."""
        ...


class ReporterGroup:
    """Forwards every callback to several reporters, in order."""

    def __init__(self, reporters: Iterable[Reporter] = ()) -> None:
        self.reporters = list(reporters)

    async def on_run_start(self) -> None:
        for reporter in self.reporters:
            await reporter.on_run_start()

    async def on_file_start(self, path: Path) -> None:
        for reporter in self.reporters:
            await reporter.on_file_start(path)

    async def on_file_error(self, path: Path, error: BaseException) -> None:
        for reporter in self.reporters:
            await reporter.on_file_error(path, error)

    async def on_suite_start(self, full_name: str) -> None:
        for reporter in self.reporters:
            await reporter.on_suite_start(full_name)

    async def on_test_start(self, full_name: str) -> None:
        for reporter in self.reporters:
            await reporter.on_test_start(full_name)

    async def on_test_end(self, result: TestResult) -> None:
        for reporter in self.reporters:
            await reporter.on_test_end(result)

    async def on_suite_end(self, full_name: str) -> None:
        for reporter in self.reporters:
            await reporter.on_suite_end(full_name)

    async def on_file_end(self, path: Path) -> None:
        for reporter in self.reporters:
            await reporter.on_file_end(path)

    async def on_run_complete(self, run_result: RunResult) -> None:
        for reporter in self.reporters:
            await reporter.on_run_complete(run_result)
