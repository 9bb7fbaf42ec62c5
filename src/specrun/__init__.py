"""specrun - describe/it test runner."""

from .assertions import expect
from .context import on_test_failed, on_test_finished
from .errors import HookError, SuiteFatalError, TestTimeoutError, UsageError
from .testing import (
    Runner,
    RunResult,
    TestResult,
    TestStatus,
    after_all,
    after_each,
    before_all,
    before_each,
    describe,
    it,
    run,
    set_test_timeout,
    suite,
    test,
)
from .version import __version__


__all__ = [
    # Declaration
    "describe",
    "suite",
    "it",
    "test",
    "before_all",
    "before_each",
    "after_each",
    "after_all",
    "set_test_timeout",
    # Side-channel hooks
    "on_test_finished",
    "on_test_failed",
    # Assertions
    "expect",
    # Running
    "Runner",
    "RunResult",
    "TestResult",
    "TestStatus",
    "run",
    # Errors
    "HookError",
    "SuiteFatalError",
    "TestTimeoutError",
    "UsageError",
    "__version__",
]
