"""Describe/it test declaration and execution.

Provides the declaration API used inside spec modules, the tree it builds and
the walker that runs it.
"""

from .builder import (
    SuiteBuilder,
    after_all,
    after_each,
    before_all,
    before_each,
    describe,
    it,
    set_test_timeout,
    suite,
    test,
)
from .executor import TestExecutor
from .result import FileError, RunResult, TestResult, TestStatus
from .runner import Runner, SuiteWalker, run
from .tree import Suite, SuiteTree, Test


__all__ = [
    "FileError",
    "Runner",
    "RunResult",
    "Suite",
    "SuiteBuilder",
    "SuiteTree",
    "SuiteWalker",
    "Test",
    "TestExecutor",
    "TestResult",
    "TestStatus",
    "after_all",
    "after_each",
    "before_all",
    "before_each",
    "describe",
    "it",
    "run",
    "set_test_timeout",
    "suite",
    "test",
]
