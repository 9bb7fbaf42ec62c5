"""Shared fixtures for unit tests."""

from pathlib import Path

import pytest

from specrun.context import get_test_hook_registry
from specrun.reports.base import Reporter
from specrun.testing.builder import SuiteBuilder


class NullReporter(Reporter):
    """Silent reporter for testing."""

    async def on_run_start(self) -> None:
        pass

    async def on_file_start(self, path: Path) -> None:
        pass

    async def on_file_error(self, path: Path, error: BaseException) -> None:
        pass

    async def on_suite_start(self, full_name: str) -> None:
        pass

    async def on_test_start(self, full_name: str) -> None:
        pass

    async def on_test_end(self, result) -> None:
        pass

    async def on_suite_end(self, full_name: str) -> None:
        pass

    async def on_file_end(self, path: Path) -> None:
        pass

    async def on_run_complete(self, run_result) -> None:
        pass


class RecordingReporter(NullReporter):
    """Reporter that records every callback as a ``(name, payload)`` pair."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    async def on_run_start(self) -> None:
        self.events.append(("run_start", None))

    async def on_file_start(self, path: Path) -> None:
        self.events.append(("file_start", path))

    async def on_file_error(self, path: Path, error: BaseException) -> None:
        self.events.append(("file_error", path))

    async def on_suite_start(self, full_name: str) -> None:
        self.events.append(("suite_start", full_name))

    async def on_test_start(self, full_name: str) -> None:
        self.events.append(("test_start", full_name))

    async def on_test_end(self, result) -> None:
        self.events.append(("test_end", result.full_name))

    async def on_suite_end(self, full_name: str) -> None:
        self.events.append(("suite_end", full_name))

    async def on_file_end(self, path: Path) -> None:
        self.events.append(("file_end", path))

    async def on_run_complete(self, run_result) -> None:
        self.events.append(("run_complete", run_result.total))


@pytest.fixture
def null_reporter() -> NullReporter:
    """Provide a silent reporter for tests."""
    return NullReporter()


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def builder():
    """Provide a builder that is active for the duration of the test."""
    suite_builder = SuiteBuilder()
    with suite_builder.collecting():
        yield suite_builder


@pytest.fixture(autouse=True)
def clean_hook_registry():
    """Make sure no execution token leaks from one test into the next."""
    get_test_hook_registry().reset()
    yield
    get_test_hook_registry().reset()
