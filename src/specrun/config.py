"""Configuration loading for specrun.

Settings come from ``specrun.toml`` or the ``[tool.specrun]`` table of
``pyproject.toml``, whichever is found first walking up from the start
directory. Command-line flags override them.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from specrun.loader import DEFAULT_TEST_IGNORE, DEFAULT_TEST_MATCH
from specrun.testing.tree import DEFAULT_HOOK_TIMEOUT_MS, DEFAULT_TEST_TIMEOUT_MS


CONFIG_FILE_NAME = "specrun.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"

SAMPLE_CONFIG = f"""\
# specrun configuration

# Files or directories to run when none are given on the command line
test_paths = ["."]

# File name patterns collected from directories
test_match = {list(DEFAULT_TEST_MATCH)!r}

# Directory names never searched
test_ignore = ["node_modules", ".venv", "build", "dist"]

# Default timeout for each test, in milliseconds
test_timeout = {DEFAULT_TEST_TIMEOUT_MS}

# Timeout for before_all/after_all hooks, in milliseconds
hook_timeout = {DEFAULT_HOOK_TIMEOUT_MS}

# Stop the run at the first failed test
bail = false
"""


class SpecrunConfig(BaseModel):
    """Main configuration for specrun."""

    test_paths: list[str] = Field(default_factory=lambda: ["."], description="Files or directories to run")
    test_match: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEST_MATCH),
        description="File name patterns collected from directories",
    )
    test_ignore: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEST_IGNORE),
        description="Directory names skipped during collection",
    )
    test_timeout: int = Field(default=DEFAULT_TEST_TIMEOUT_MS, description="Per-test timeout in milliseconds")
    hook_timeout: int = Field(default=DEFAULT_HOOK_TIMEOUT_MS, description="before_all/after_all timeout in milliseconds")
    bail: bool = Field(default=False, description="Stop after the first failed test")
    verbosity: int = Field(default=0, description="Console verbosity; negative is quieter")
    reporters: list[str] = Field(default_factory=list, description="Reporter names or import strings")
    reporter_options: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Constructor keyword arguments per reporter name",
    )

    @field_validator("test_timeout", "hook_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Timeout must be a positive number of milliseconds")
        return v

    @field_validator("test_match")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        if not v or not all(pattern.strip() for pattern in v):
            raise ValueError("test_match must contain at least one non-empty pattern")
        return v

    @classmethod
    def from_file(cls, path: Path | str) -> SpecrunConfig:
        """Load configuration from ``specrun.toml`` or a ``pyproject.toml``."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        if path.name == PYPROJECT_FILE_NAME:
            data = data.get("tool", {}).get("specrun", {})
        return cls.model_validate(data)


DEFAULT_CONFIG = SpecrunConfig()


def find_config_file(start_dir: Path | str | None = None) -> Path | None:
    """Find the nearest configuration file, searching up the directory tree."""
    current = Path.cwd() if start_dir is None else Path(start_dir)
    current = current.resolve()

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

        pyproject = directory / PYPROJECT_FILE_NAME
        if pyproject.is_file():
            with open(pyproject, "rb") as f:
                if "specrun" in tomllib.load(f).get("tool", {}):
                    return pyproject
    return None


def load_config(start_dir: Path | str | None = None) -> SpecrunConfig:
    """Load the nearest configuration, or the defaults when there is none."""
    path = find_config_file(start_dir)
    if path is None:
        return DEFAULT_CONFIG.model_copy(deep=True)
    return SpecrunConfig.from_file(path)


def write_sample_config(path: Path | str = CONFIG_FILE_NAME) -> Path:
    """Create a commented starter ``specrun.toml``."""
    path = Path(path)
    if path.exists():
        raise FileExistsError(f"Configuration file already exists: {path}")
    path.write_text(SAMPLE_CONFIG)
    return path


__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "SpecrunConfig",
    "find_config_file",
    "load_config",
    "write_sample_config",
]
