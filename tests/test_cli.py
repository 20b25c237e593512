"""Tests for logcarp.cli — global flags, subcommands, exit codes."""

import io
import subprocess
import sys

import pytest

from logcarp.cli import _extract_global_flags, main
from logcarp.commands.emit import EVENTS, read_message

from conftest import STAMP_RE


def read_lines(path):
    return path.read_text(encoding="utf-8").splitlines()


class TestGlobalFlagExtraction:
    """Test the two-pass global flag parsing."""

    def test_flags_before_subcommand(self):
        global_args, remaining = _extract_global_flags(
            ["--debug-level", "on", "debug", "x=42"]
        )
        assert global_args.debug_level == "on"
        assert remaining == ["debug", "x=42"]

    def test_flags_after_subcommand(self):
        global_args, remaining = _extract_global_flags(
            ["warn", "disk", "full", "--errors", "/tmp/e.log"]
        )
        assert global_args.error == "/tmp/e.log"
        assert remaining == ["warn", "disk", "full"]

    def test_debug_flag_vs_debug_command(self):
        global_args, remaining = _extract_global_flags(
            ["--debug", "/tmp/d.log", "debug", "hello"]
        )
        assert global_args.debug == "/tmp/d.log"
        assert remaining == ["debug", "hello"]

    def test_no_abbreviations(self):
        global_args, remaining = _extract_global_flags(["--prog", "x", "warn"])
        assert global_args.program is None
        assert "--prog" in remaining


class TestMain:
    """Test main() end to end with file sinks."""

    def test_warn_to_file(self, tmp_path):
        err = tmp_path / "err.log"
        code = main(["--errors", str(err), "--program", "backup.sh",
                     "warn", "disk", "nearly", "full"], environ={})
        assert code == 0
        lines = read_lines(err)
        assert len(lines) == 1
        match = STAMP_RE.match(lines[0])
        assert match.group(1) == "backup.sh"
        assert match.group(3) == "disk nearly full"

    def test_die_exit_code(self, tmp_path):
        err = tmp_path / "err.log"
        code = main(["--errors", str(err), "die", "bye"], environ={})
        assert code == 255
        assert read_lines(err)[0].endswith("ERR: bye")

    def test_server_warn_bypasses_error_file(self, tmp_path, capsys):
        err = tmp_path / "err.log"
        code = main(["--errors", str(err), "server-warn", "to", "real", "stderr"],
                    environ={})
        assert code == 0
        assert read_lines(err) == []
        captured = capsys.readouterr().err.splitlines()
        assert captured[-1].endswith("ERR: to real stderr")

    def test_log_gated_by_level(self, tmp_path):
        log = tmp_path / "app.log"
        assert main(["--log", str(log), "log", "quiet"], environ={}) == 0
        assert read_lines(log) == []
        assert main(["--log", str(log), "--log-level", "on", "log", "loud"],
                    environ={}) == 0
        assert read_lines(log)[0].endswith("LOG: loud")

    def test_environment_switches(self, tmp_path):
        dbg = tmp_path / "debug.log"
        environ = {"LOGCARP_DEBUGFILE": str(dbg), "LOGCARP_DEBUGLEVEL": "trace",
                   "LOGCARP_PROGRAM": "envprog"}
        assert main(["trace", "deep"], environ=environ) == 0
        assert read_lines(dbg)[0].endswith("envprog TRC: deep")

    def test_log_and_debug_same_file_written_once(self, tmp_path):
        shared = tmp_path / "shared.log"
        code = main(["--log", str(shared), "--debug", str(shared),
                     "--debug-level", "1", "log", "once"], environ={})
        assert code == 0
        assert len(read_lines(shared)) == 1

    def test_stdin_message(self, tmp_path, monkeypatch):
        err = tmp_path / "err.log"
        monkeypatch.setattr("sys.stdin", io.StringIO("first\nsecond"))
        assert main(["--errors", str(err), "warn"], environ={}) == 0
        lines = read_lines(err)
        assert len(lines) == 2
        assert lines[1].endswith("ERR: second")

    def test_bad_sink(self, tmp_path, capsys):
        code = main(["--errors", str(tmp_path / "no" / "x.log"), "warn", "x"],
                    environ={})
        assert code == 2
        assert "Invalid sink" in capsys.readouterr().err

    def test_channels_listing(self, tmp_path, capsys):
        log = tmp_path / "app.log"
        assert main(["--log", str(log), "--channels"], environ={}) == 0
        out = capsys.readouterr().out
        assert "raw_error" in out
        assert str(log) in out

    def test_no_args_prints_help(self, capsys):
        assert main([], environ={}) == 0
        assert "warn" in capsys.readouterr().out

    def test_version(self, capsys):
        assert main(["--version"], environ={}) == 0
        assert "logcarp" in capsys.readouterr().out


class TestEmitCommand:
    """Test commands.emit helpers."""

    def test_every_event_has_a_router_method(self):
        from logcarp.lib.route_lib import DiagnosticRouter
        for method, _help in EVENTS.values():
            assert callable(getattr(DiagnosticRouter, method))

    def test_read_message_words(self):
        class Args:
            message = ["a", "b"]
        assert read_message(Args()) == "a b\n"

    def test_read_message_stdin(self):
        class Args:
            message = []
        assert read_message(Args(), stdin=io.StringIO("x")) == "x\n"
        assert read_message(Args(), stdin=io.StringIO("")) == ""


@pytest.mark.slow
def test_module_entry_point(tmp_path):
    err = tmp_path / "err.log"
    result = subprocess.run(
        [sys.executable, "-m", "logcarp.cli", "--errors", str(err), "die", "x"],
        capture_output=True, text=True,
    )
    assert result.returncode == 255
    assert read_lines(err)[0].endswith("ERR: x")
