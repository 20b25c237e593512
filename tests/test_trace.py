"""Tests for route_lib.trace — the @traced decorator."""

from pathlib import Path

import pytest

from logcarp.lib.route_lib import get_router, init_router, traced
from logcarp.lib.route_lib.trace import _short_repr

from conftest import lines_of


@traced
def add(a, b=0):
    return a + b


@traced
def shout(text):
    print(text.upper())


@traced
def explode():
    raise ValueError("nope")


@pytest.fixture
def bug(err_buf, bug_buf):
    init_router(program="t.py", error=err_buf, debug=bug_buf)
    return bug_buf


class TestTraced:
    """Entry/exit lines only at TRACE level."""

    def test_silent_below_trace(self, bug):
        get_router().set_debug_level(1)
        assert add(1, b=2) == 3
        assert bug.getvalue() == ""

    def test_entry_and_exit(self, bug):
        get_router().set_debug_level(2)
        assert add(1, b=2) == 3
        out = lines_of(bug)
        assert len(out) == 2
        assert "TRC: >> test_trace.add(1, b=2)" in out[0]
        assert "TRC: << test_trace.add returned: 3" in out[1]

    def test_none_result(self, bug, capsys):
        get_router().set_debug_level("trace")
        shout("hi")
        assert capsys.readouterr().out == "HI\n"
        assert lines_of(bug)[-1].split(" at ")[0].endswith("<< test_trace.shout")

    def test_raise(self, bug):
        get_router().set_debug_level(2)
        with pytest.raises(ValueError):
            explode()
        assert "!! test_trace.explode raised: ValueError: nope" in bug.getvalue()

    def test_long_arguments_shortened(self, bug):
        get_router().set_debug_level(2)
        add([1, 2, 3, 4], [5])
        add("x" * 60, "y")
        text = bug.getvalue()
        assert "[...4 items...]" in text
        assert "'" + "x" * 47 + "...'" in text

    def test_short_repr_path(self):
        assert _short_repr(Path("a")) == "Path('a')"

    def test_wraps(self):
        assert add.__name__ == "add"
