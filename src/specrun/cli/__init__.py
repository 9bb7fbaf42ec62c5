"""CLI module for the specrun test runner."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from specrun.config import CONFIG_FILE_NAME, SpecrunConfig, load_config, write_sample_config
from specrun.loader import collect_test_files
from specrun.reports import resolve_reporters
from specrun.reports.base import Reporter
from specrun.testing.runner import Runner
from specrun.version import __version__


EXIT_INTERNAL_ERROR = 2

logger = logging.getLogger("specrun")


def main() -> None:
    """Entry point for specrun CLI."""
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:])

    if args.command == "run":
        try:
            config = load_config()
        except (OSError, ValueError) as exc:
            Console(stderr=True).print(f"[red]Invalid configuration: {exc}[/red]")
            raise SystemExit(EXIT_INTERNAL_ERROR) from exc
        raise SystemExit(_run_command(args, config))

    if args.command == "init":
        raise SystemExit(_init_command(args))

    parser.print_help()
    raise SystemExit(0)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="specrun", description="Describe/it test runner")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run spec files")
    run_parser.add_argument("paths", nargs="*", help="Spec files or directories")
    run_parser.add_argument("-q", "--quiet", action="count", default=0, help="Reduce CLI output")
    run_parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase CLI output")
    run_parser.add_argument("--timeout", type=int, help="Default per-test timeout in milliseconds")
    run_parser.add_argument("--hook-timeout", type=int, help="before_all/after_all timeout in milliseconds")
    run_parser.add_argument("--bail", action="store_true", help="Stop after the first failed test")
    run_parser.add_argument(
        "--reporter",
        dest="reporters",
        action="append",
        help="Reporter name or import string (repeatable, default: console)",
    )

    init_parser = subparsers.add_parser("init", help=f"Write a starter {CONFIG_FILE_NAME}")
    init_parser.add_argument("--path", default=CONFIG_FILE_NAME, help="Where to write the file")

    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False


def _resolve_verbosity(args: argparse.Namespace, config: SpecrunConfig) -> int:
    return config.verbosity + args.verbose - args.quiet


def _resolve_paths(args: argparse.Namespace, config: SpecrunConfig) -> list[str]:
    if args.paths:
        return args.paths
    return config.test_paths


def _resolve_test_timeout(args: argparse.Namespace, config: SpecrunConfig) -> int:
    if args.timeout is not None and args.timeout > 0:
        return args.timeout
    return config.test_timeout


def _resolve_hook_timeout(args: argparse.Namespace, config: SpecrunConfig) -> int:
    if args.hook_timeout is not None and args.hook_timeout > 0:
        return args.hook_timeout
    return config.hook_timeout


def _resolve_reporters(args: argparse.Namespace, config: SpecrunConfig, verbosity: int) -> list[Reporter]:
    names = args.reporters or config.reporters or ["console"]
    return resolve_reporters(names, config.reporter_options, verbosity=verbosity)


def _run_command(args: argparse.Namespace, config: SpecrunConfig) -> int:
    console = Console(stderr=True)
    verbosity = _resolve_verbosity(args, config)
    _configure_logging(verbosity)

    try:
        files = collect_test_files(_resolve_paths(args, config), config.test_match, config.test_ignore)
        reporters = _resolve_reporters(args, config, verbosity)
    except (FileNotFoundError, ValueError, TypeError) as exc:
        console.print(f"[red]{exc}[/red]")
        return EXIT_INTERNAL_ERROR

    if not files:
        console.print("[yellow]No spec files found[/yellow]")
        return 0

    runner = Runner(
        reporters=reporters,
        test_timeout=_resolve_test_timeout(args, config),
        hook_timeout=_resolve_hook_timeout(args, config),
        bail=args.bail or config.bail,
    )
    try:
        run_result = asyncio.run(runner.run(files))
    except Exception:
        logger.exception("Internal error while running tests")
        return EXIT_INTERNAL_ERROR
    return run_result.exit_code


def _init_command(args: argparse.Namespace) -> int:
    console = Console()
    try:
        path = write_sample_config(Path(args.path))
    except FileExistsError as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        return 1
    console.print(f"[green]Created {path}[/green]")
    return 0


__all__ = ["main"]
