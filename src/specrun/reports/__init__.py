"""Reporting module for specrun test output."""

from specrun.reports.base import Reporter, ReporterGroup
from specrun.reports.console import ConsoleReporter
from specrun.reports.registry import (
    clear_reporter_registry,
    get_reporter_registry,
    register_builtin,
    reporter,
    resolve_reporter,
    resolve_reporters,
)


register_builtin("console", ConsoleReporter)
register_builtin("ConsoleReporter", ConsoleReporter)

__all__ = [
    "ConsoleReporter",
    "Reporter",
    "ReporterGroup",
    "clear_reporter_registry",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
