"""Loading test modules and finding them on disk."""

from __future__ import annotations

import importlib.util
import itertools
import sys
from collections.abc import Iterable, Sequence
from fnmatch import fnmatch
from pathlib import Path

from specrun.errors import LoadError
from specrun.testing.builder import SuiteBuilder
from specrun.testing.tree import DEFAULT_TEST_TIMEOUT_MS, SuiteTree


DEFAULT_TEST_MATCH = ("*_spec.py", "spec_*.py")
DEFAULT_TEST_IGNORE = (".git", ".venv", "venv", "node_modules", "__pycache__", "build", "dist")

_module_ids = itertools.count(1)


def _load_module(path: Path) -> None:
    module_name = f"_specrun_module_{next(_module_ids)}_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import {path}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    parent = str(path.parent)
    sys.path.insert(0, parent)
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    finally:
        sys.path.remove(parent)


def load_test_module(path: Path | str, *, test_timeout: int = DEFAULT_TEST_TIMEOUT_MS) -> SuiteTree:
    """Execute a test module top to bottom and return the tree it declared.

    Every load gets its own :class:`SuiteBuilder`, so no declarations leak
    between modules.

    Raises:
        LoadError: If the module raises anything while loading, including a
            ``UsageError`` from a misplaced declaration.
    """
    path = Path(path).resolve()
    builder = SuiteBuilder(test_timeout=test_timeout)
    try:
        with builder.collecting():
            _load_module(path)
    except Exception as exc:
        raise LoadError(path, exc) from exc
    return builder.build()


def _matches(path: Path, patterns: Sequence[str]) -> bool:
    return any(fnmatch(path.name, pattern) for pattern in patterns)


def collect_test_files(
    paths: Iterable[Path | str],
    patterns: Sequence[str] = DEFAULT_TEST_MATCH,
    ignore: Sequence[str] = DEFAULT_TEST_IGNORE,
) -> list[Path]:
    """Resolve files and directories into a sorted list of test modules.

    Files are taken as given. Directories are searched recursively for names
    matching ``patterns``, skipping any directory whose name is in ``ignore``.

    Raises:
        FileNotFoundError: If a path does not exist.
    """
    found: dict[Path, None] = {}
    for raw in paths:
        path = Path(raw).resolve()
        if path.is_file():
            found[path] = None
        elif path.is_dir():
            for candidate in sorted(path.rglob("*.py")):
                relative_parts = candidate.relative_to(path).parts[:-1]
                if any(part in ignore or part.startswith(".") for part in relative_parts):
                    continue
                if _matches(candidate, patterns):
                    found[candidate] = None
        else:
            msg = f"Cannot find test path: {raw}"
            raise FileNotFoundError(msg)
    return sorted(found)


__all__ = ["DEFAULT_TEST_IGNORE", "DEFAULT_TEST_MATCH", "collect_test_files", "load_test_module"]
