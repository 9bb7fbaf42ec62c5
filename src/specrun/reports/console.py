"""Rich console reporter."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from specrun.errors import describe_error
from specrun.testing.result import TestStatus

if TYPE_CHECKING:
    from specrun.testing.result import RunResult, TestResult


_SYMBOLS = {
    TestStatus.PASSED: "[green]✓[/green]",
    TestStatus.FAILED: "[red]✗[/red]",
    TestStatus.SKIPPED: "[yellow]↓[/yellow]",
    TestStatus.TODO: "[cyan]✎[/cyan]",
}


def _relative(path: Path) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:
        return str(path)


class ConsoleReporter:
    """Prints one line per test and a summary at the end of the run.

    Verbosity below zero prints only failures and the summary; above zero it
    also prints suite names and error types.
    """

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        self.console = console or Console()
        self.verbosity = verbosity

    async def on_run_start(self) -> None:
        if self.verbosity >= 0:
            self.console.print("[bold]Running tests...[/bold]")

    async def on_file_start(self, path: Path) -> None:
        if self.verbosity >= 0:
            self.console.print()
            self.console.print(f"[bold blue]{escape(_relative(path))}[/bold blue]")

    async def on_file_error(self, path: Path, error: BaseException) -> None:
        self.console.print(f"[red]Error loading {escape(_relative(path))}:[/red] {escape(describe_error(error))}")

    async def on_suite_start(self, full_name: str) -> None:
        if self.verbosity > 0:
            self.console.print(f"  [dim]{escape(full_name)}[/dim]")

    async def on_test_start(self, full_name: str) -> None:
        pass

    async def on_test_end(self, result: TestResult) -> None:
        if self.verbosity < 0 and not result.status.is_failure:
            return
        line = f"  {_SYMBOLS[result.status]} {escape(result.full_name)}"
        if result.status in {TestStatus.PASSED, TestStatus.FAILED}:
            line += f" [dim]({result.duration_ms}ms)[/dim]"
        if result.attempts > 1:
            line += f" [dim]\\[{result.attempts} attempts][/dim]"
        self.console.print(line)
        if result.error is not None and result.status.is_failure:
            self.console.print(f"      [red]{escape(self._format_error(result.error))}[/red]")

    async def on_suite_end(self, full_name: str) -> None:
        pass

    async def on_file_end(self, path: Path) -> None:
        pass

    async def on_run_complete(self, run_result: RunResult) -> None:
        failures = run_result.failures
        if failures:
            self.console.print()
            self.console.print(f"[bold red]Failed tests ({len(failures)}):[/bold red]")
            for result in failures:
                location = f" [dim]{escape(_relative(result.file))}[/dim]" if result.file else ""
                self.console.print(f"  [red]✗[/red] {escape(result.full_name)}{location}")
                if result.error is not None:
                    self.console.print(f"      {escape(self._format_error(result.error))}")

        for file_error in run_result.file_errors:
            self.console.print(f"[red]Could not load {escape(_relative(file_error.path))}[/red]")

        parts = [f"[green]{run_result.passed} passed[/green]"]
        if run_result.failed:
            parts.append(f"[red]{run_result.failed} failed[/red]")
        if run_result.skipped:
            parts.append(f"[yellow]{run_result.skipped} skipped[/yellow]")
        if run_result.todo:
            parts.append(f"[cyan]{run_result.todo} todo[/cyan]")

        self.console.print()
        self.console.print(f"[bold]Tests[/bold]     {' | '.join(parts)} ({run_result.total})")
        if run_result.file_errors:
            self.console.print(f"[bold]Errors[/bold]    [red]{len(run_result.file_errors)} module(s) failed to load[/red]")
        self.console.print(f"[bold]Duration[/bold]  {run_result.duration_ms}ms")
        if run_result.stopped_early:
            self.console.print("[yellow]Stopped early after the first failure (bail)[/yellow]")

    def _format_error(self, error: BaseException) -> str:
        if self.verbosity > 0:
            return f"{type(error).__name__}: {describe_error(error)}"
        return describe_error(error)
