from .expect import Expectation, expect
from .result import ExpectationError, MatcherResult


__all__ = [
    "Expectation",
    "ExpectationError",
    "MatcherResult",
    "expect",
]
