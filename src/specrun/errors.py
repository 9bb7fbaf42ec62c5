"""Error types raised by specrun."""

from pathlib import Path


def describe_error(error: BaseException) -> str:
    """Return the message of an error, falling back to its type name."""
    message = str(error)
    return message if message else type(error).__name__


class SpecrunError(Exception):
    """Base class for errors raised by specrun itself."""


class UsageError(SpecrunError):
    """Raised when the declaration API is misused (test-authoring mistake)."""


class TestTimeoutError(SpecrunError, TimeoutError):
    """Raised when a test or hook does not settle before its deadline."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    def __init__(self, timeout_ms: int, label: str = "Test") -> None:
        self.timeout_ms = timeout_ms
        self.label = label
        super().__init__(f"{label} timed out after {timeout_ms}ms")


class HookError(SpecrunError):
    """A lifecycle hook failed; the message carries the hook kind as prefix."""

    def __init__(self, kind: str, cause: BaseException) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(f"{kind} hook failed: {describe_error(cause)}")


class SuiteFatalError(SpecrunError):
    """A ``before_all`` hook failed, which fails every test below the suite."""

    def __init__(self, suite_name: str, cause: BaseException) -> None:
        self.suite_name = suite_name
        self.cause = cause
        super().__init__(f"Suite hook failed: {describe_error(cause)}")


class LoadError(SpecrunError):
    """Raised when a test module cannot be loaded."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Error loading test module {path}: {describe_error(cause)}")


__all__ = [
    "HookError",
    "LoadError",
    "SpecrunError",
    "SuiteFatalError",
    "TestTimeoutError",
    "UsageError",
    "describe_error",
]
