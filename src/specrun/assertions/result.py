"""Matcher result types."""

from typing import Any

from pydantic import BaseModel


def _truncate(value: Any, max_len: int = 60) -> str:
    """Truncate a repr string if too long."""
    s = repr(value)
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."


class MatcherResult(BaseModel):
    """Result of evaluating one matcher against an actual value.

    Attributes:
    ----------
    matcher_name : str
        Name of the matcher that was evaluated (e.g. ``to_equal``)
    passed : bool
        Whether the expectation held, after applying negation
    negated : bool
        Whether the matcher was reached through ``expect(...).not_``
    message : str | None
        Explanation shown when the expectation does not hold
    """

    matcher_name: str
    passed: bool
    negated: bool = False
    message: str | None = None


class ExpectationError(AssertionError):
    """AssertionError with attached MatcherResult."""

    def __init__(self, result: MatcherResult):
        self.matcher_result = result
        super().__init__(result.message or f"{result.matcher_name} failed")
