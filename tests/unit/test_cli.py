import sys
from argparse import Namespace

import pytest

from specrun.cli import _resolve_reporters, _resolve_test_timeout, main
from specrun.config import SpecrunConfig
from specrun.reports import ConsoleReporter
from specrun.version import __version__


PASSING_SPEC = """\
from specrun import describe, it

describe("ok", lambda: it("passes", lambda: None))
"""

FAILING_SPEC = """\
from specrun import describe, it

describe("bad", lambda: it("fails", lambda: 1 / 0))
"""

SLOW_SPEC = """\
import asyncio

from specrun import describe, it


async def slow():
    await asyncio.sleep(0.5)


describe("slow", lambda: it("sleeps", slow))
"""


def run_cli(monkeypatch, tmp_path, *argv):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["specrun", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def test_passing_run_exits_zero(monkeypatch, tmp_path):
    (tmp_path / "ok_spec.py").write_text(PASSING_SPEC)
    assert run_cli(monkeypatch, tmp_path, "run", "ok_spec.py") == 0


def test_failing_run_exits_one(monkeypatch, tmp_path, capsys):
    (tmp_path / "bad_spec.py").write_text(FAILING_SPEC)

    assert run_cli(monkeypatch, tmp_path, "run", ".") == 1
    assert "bad fails" in capsys.readouterr().out


def test_missing_path_exits_two(monkeypatch, tmp_path):
    assert run_cli(monkeypatch, tmp_path, "run", "nowhere") == 2


def test_unknown_reporter_exits_two(monkeypatch, tmp_path):
    (tmp_path / "ok_spec.py").write_text(PASSING_SPEC)
    assert run_cli(monkeypatch, tmp_path, "run", "--reporter", "nope", "ok_spec.py") == 2


def test_timeout_flag(monkeypatch, tmp_path, capsys):
    (tmp_path / "slow_spec.py").write_text(SLOW_SPEC)

    assert run_cli(monkeypatch, tmp_path, "run", "--timeout", "20", "slow_spec.py") == 1
    assert "timed out after 20ms" in capsys.readouterr().out


def test_config_file_is_used(monkeypatch, tmp_path, capsys):
    (tmp_path / "specrun.toml").write_text("test_timeout = 25\n")
    (tmp_path / "slow_spec.py").write_text(SLOW_SPEC)

    assert run_cli(monkeypatch, tmp_path, "run") == 1
    assert "timed out after 25ms" in capsys.readouterr().out


def test_init_writes_config_once(monkeypatch, tmp_path):
    assert run_cli(monkeypatch, tmp_path, "init") == 0
    assert (tmp_path / "specrun.toml").is_file()
    assert run_cli(monkeypatch, tmp_path, "init") == 1


def test_no_command_prints_help(monkeypatch, tmp_path, capsys):
    assert run_cli(monkeypatch, tmp_path) == 0
    assert "usage: specrun" in capsys.readouterr().out


def test_version_flag(monkeypatch, tmp_path, capsys):
    assert run_cli(monkeypatch, tmp_path, "--version") == 0
    assert capsys.readouterr().out.strip() == f"specrun {__version__}"


class TestResolveReporters:
    """Tests for _resolve_reporters function."""

    def _make_args(self, **kwargs) -> Namespace:
        defaults = {"reporters": None}
        defaults.update(kwargs)
        return Namespace(**defaults)

    def test_default_console_reporter(self):
        reporters = _resolve_reporters(self._make_args(), SpecrunConfig(), verbosity=0)
        assert len(reporters) == 1
        assert isinstance(reporters[0], ConsoleReporter)

    def test_verbosity_is_forwarded(self):
        reporters = _resolve_reporters(self._make_args(), SpecrunConfig(), verbosity=2)
        assert reporters[0].verbosity == 2

    def test_cli_overrides_config(self):
        config = SpecrunConfig(reporters=["unknown"])
        reporters = _resolve_reporters(self._make_args(reporters=["console"]), config, verbosity=0)
        assert isinstance(reporters[0], ConsoleReporter)


def test_timeout_resolution():
    config = SpecrunConfig(test_timeout=300)
    assert _resolve_test_timeout(Namespace(timeout=None), config) == 300
    assert _resolve_test_timeout(Namespace(timeout=50), config) == 50
    assert _resolve_test_timeout(Namespace(timeout=0), config) == 300
