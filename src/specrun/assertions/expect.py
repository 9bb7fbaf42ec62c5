"""``expect(actual).to_*`` matchers.

Every matcher raises :class:`ExpectationError`, an ``AssertionError``, when the
expectation does not hold, so a failed matcher fails the test like a plain
``assert`` would.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping, Sized
from typing import Any

from specrun.assertions.result import ExpectationError, MatcherResult, _truncate


_MISSING = object()


class Expectation:
    """Matchers bound to one actual value."""

    def __init__(self, actual: Any, *, negated: bool = False) -> None:
        self.actual = actual
        self.negated = negated

    @property
    def not_(self) -> Expectation:
        """Negate the next matcher."""
        return Expectation(self.actual, negated=not self.negated)

    def _check(self, matcher_name: str, passed: bool, message: str, negated_message: str) -> None:
        holds = passed != self.negated
        result = MatcherResult(
            matcher_name=matcher_name,
            passed=holds,
            negated=self.negated,
            message=None if holds else (negated_message if self.negated else message),
        )
        if not holds:
            raise ExpectationError(result)

    def to_be(self, expected: Any) -> None:
        """Identity for objects, equality for numbers and strings."""
        if isinstance(expected, (int, float, str, bytes)) and not isinstance(expected, bool):
            same = type(self.actual) is type(expected) and self.actual == expected
        else:
            same = self.actual is expected
        self._check(
            "to_be",
            same,
            f"Expected {_truncate(self.actual)} to be {_truncate(expected)}",
            f"Expected {_truncate(self.actual)} not to be {_truncate(expected)}",
        )

    def to_equal(self, expected: Any) -> None:
        self._check(
            "to_equal",
            self.actual == expected,
            f"Expected {_truncate(self.actual)} to equal {_truncate(expected)}",
            f"Expected {_truncate(self.actual)} not to equal {_truncate(expected)}",
        )

    def to_be_truthy(self) -> None:
        self._check(
            "to_be_truthy",
            bool(self.actual),
            f"Expected {_truncate(self.actual)} to be truthy",
            f"Expected {_truncate(self.actual)} not to be truthy",
        )

    def to_be_falsy(self) -> None:
        self._check(
            "to_be_falsy",
            not self.actual,
            f"Expected {_truncate(self.actual)} to be falsy",
            f"Expected {_truncate(self.actual)} not to be falsy",
        )

    def to_be_none(self) -> None:
        self._check(
            "to_be_none",
            self.actual is None,
            f"Expected {_truncate(self.actual)} to be None",
            "Expected value not to be None",
        )

    def to_be_defined(self) -> None:
        self._check(
            "to_be_defined",
            self.actual is not None,
            "Expected value to be defined",
            f"Expected {_truncate(self.actual)} to be undefined",
        )

    def to_raise(self, expected: type[BaseException] | str | re.Pattern[str] | None = None) -> None:
        """``actual`` must be a zero-argument callable that raises.

        ``expected`` narrows the check to an exception type, a substring of
        the message, or a regular expression searched in the message.
        """
        if not callable(self.actual):
            msg = "to_raise expects a callable"
            raise TypeError(msg)

        fn: Callable[[], Any] = self.actual
        raised: BaseException | None = None
        try:
            fn()
        except Exception as exc:
            raised = exc

        if raised is None:
            matched = False
            detail = "it did not raise"
        elif expected is None:
            matched = True
            detail = f"it raised {type(raised).__name__}"
        elif isinstance(expected, type):
            matched = isinstance(raised, expected)
            detail = f"it raised {type(raised).__name__}: {raised}"
        elif isinstance(expected, re.Pattern):
            matched = expected.search(str(raised)) is not None
            detail = f"it raised {str(raised)!r}"
        else:
            matched = expected in str(raised)
            detail = f"it raised {str(raised)!r}"

        wanted = "" if expected is None else f" {_truncate(expected)}"
        self._check(
            "to_raise",
            matched,
            f"Expected function to raise{wanted}, but {detail}",
            f"Expected function not to raise{wanted}, but {detail}",
        )

    def to_match(self, pattern: str | re.Pattern[str]) -> None:
        if not isinstance(self.actual, str):
            msg = f"to_match expects a string, got {type(self.actual).__name__}"
            raise TypeError(msg)
        found = re.search(pattern, self.actual) is not None
        self._check(
            "to_match",
            found,
            f"Expected {_truncate(self.actual)} to match {_truncate(pattern)}",
            f"Expected {_truncate(self.actual)} not to match {_truncate(pattern)}",
        )

    def to_contain(self, item: Any) -> None:
        try:
            contained = item in self.actual
        except TypeError:
            contained = False
        self._check(
            "to_contain",
            contained,
            f"Expected {_truncate(self.actual)} to contain {_truncate(item)}",
            f"Expected {_truncate(self.actual)} not to contain {_truncate(item)}",
        )

    def to_have_property(self, path: str | list[str] | tuple[str, ...], value: Any = _MISSING) -> None:
        """A nested attribute, key or index exists at ``path``, and equals ``value`` if given.

        ``path`` is a dotted string (``"user.address.city"``) or a sequence of
        keys. Digit segments index into lists and tuples.
        """
        if self.actual is None:
            raise TypeError("to_have_property cannot be used on None")

        keys = [str(key) for key in path] if isinstance(path, (list, tuple)) else path.split(".")
        present, found = _lookup(self.actual, keys)
        dotted = ".".join(keys)

        if value is _MISSING:
            passed = present
            wanted = f"property {dotted!r}"
        else:
            passed = present and found == value
            wanted = f"property {dotted!r} equal to {_truncate(value)}"
        self._check(
            "to_have_property",
            passed,
            f"Expected {_truncate(self.actual)} to have {wanted}",
            f"Expected {_truncate(self.actual)} not to have {wanted}",
        )

    def to_have_length(self, expected: int) -> None:
        if not isinstance(self.actual, Sized):
            msg = f"to_have_length expects a sized value, got {type(self.actual).__name__}"
            raise TypeError(msg)
        length = len(self.actual)
        self._check(
            "to_have_length",
            length == expected,
            f"Expected length {expected}, got {length}",
            f"Expected length not to be {expected}",
        )

    def to_be_greater_than(self, expected: float) -> None:
        self._compare("to_be_greater_than", self.actual > expected, ">", expected)

    def to_be_greater_than_or_equal(self, expected: float) -> None:
        self._compare("to_be_greater_than_or_equal", self.actual >= expected, ">=", expected)

    def to_be_less_than(self, expected: float) -> None:
        self._compare("to_be_less_than", self.actual < expected, "<", expected)

    def to_be_less_than_or_equal(self, expected: float) -> None:
        self._compare("to_be_less_than_or_equal", self.actual <= expected, "<=", expected)

    def to_be_close_to(self, expected: float, precision: int = 2) -> None:
        """``|actual - expected| < 10**-precision / 2``."""
        close = math.isclose(self.actual, expected) or abs(self.actual - expected) < 10**-precision / 2
        self._check(
            "to_be_close_to",
            close,
            f"Expected {self.actual!r} to be close to {expected!r} (precision {precision})",
            f"Expected {self.actual!r} not to be close to {expected!r} (precision {precision})",
        )

    def to_be_instance_of(self, expected: type | tuple[type, ...]) -> None:
        name = getattr(expected, "__name__", repr(expected))
        self._check(
            "to_be_instance_of",
            isinstance(self.actual, expected),
            f"Expected {_truncate(self.actual)} to be an instance of {name}",
            f"Expected {_truncate(self.actual)} not to be an instance of {name}",
        )

    def _compare(self, matcher_name: str, passed: bool, operator: str, expected: float) -> None:
        self._check(
            matcher_name,
            passed,
            f"Expected {self.actual!r} {operator} {expected!r}",
            f"Expected not {self.actual!r} {operator} {expected!r}",
        )


def expect(actual: Any) -> Expectation:
    """Start an expectation about ``actual``."""
    return Expectation(actual)


def _lookup(target: Any, keys: list[str]) -> tuple[bool, Any]:
    current = target
    for key in keys:
        if current is None:
            return False, None
        if isinstance(current, Mapping):
            if key not in current:
                return False, None
            current = current[key]
        elif isinstance(current, (list, tuple)) and key.lstrip("-").isdigit():
            index = int(key)
            if not -len(current) <= index < len(current):
                return False, None
            current = current[index]
        elif hasattr(current, key):
            current = getattr(current, key)
        else:
            return False, None
    return True, current
