"""Shared test fixtures for the logcarp test suite."""

import io
import re
import sys
import warnings

import pytest

from logcarp.lib.route_lib import ChannelRegistry, DiagnosticRouter
from logcarp.lib.route_lib import hooks as _hooks_mod
from logcarp.lib.route_lib import manager as _manager_mod


PROGRAM = "myapp.py"

# [ctime]  pid program TAG: text
STAMP_RE = re.compile(
    r"^\[\w{3} \w{3} [ \d]\d \d\d:\d\d:\d\d \d{4}\] *\d+ (\S+) (ERR|LOG|BUG|TRC): (.*)$"
)


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-process tests")


def lines_of(stream):
    """Output lines written to an in-memory sink."""
    return stream.getvalue().splitlines()


# ---------------------------------------------------------------------------
# Singleton and hook isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_router():
    """Give every test a fresh process-wide router and untouched hooks."""
    saved = _manager_mod._router
    saved_showwarning = warnings.showwarning
    saved_excepthook = sys.excepthook
    _manager_mod._router = None
    yield
    _hooks_mod.uninstall_default_handler()
    _manager_mod._router = saved
    warnings.showwarning = saved_showwarning
    sys.excepthook = saved_excepthook


# ---------------------------------------------------------------------------
# In-memory sinks
# ---------------------------------------------------------------------------
@pytest.fixture
def err_buf():
    return io.StringIO()


@pytest.fixture
def log_buf():
    return io.StringIO()


@pytest.fixture
def bug_buf():
    return io.StringIO()


@pytest.fixture
def out_buf():
    return io.StringIO()


@pytest.fixture
def registry(err_buf, log_buf, bug_buf, out_buf):
    """Three channels on three distinct in-memory sinks.

    err_buf also stands in for the real stderr behind raw_error.
    """
    return ChannelRegistry(error=err_buf, log=log_buf, debug=bug_buf,
                           output=out_buf, raw_error=err_buf)


@pytest.fixture
def router(registry):
    """A router over distinct sinks, both levels off."""
    return DiagnosticRouter(channels=registry, program=PROGRAM)


@pytest.fixture
def default_router(err_buf, out_buf):
    """A router with the default bindings (log -> error, debug -> output)."""
    reg = ChannelRegistry(error=err_buf, output=out_buf, raw_error=err_buf)
    return DiagnosticRouter(channels=reg, program=PROGRAM)


# ---------------------------------------------------------------------------
# File sinks
# ---------------------------------------------------------------------------
@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "app.log"


@pytest.fixture
def log_file(log_path):
    """An append-mode file the test owns (closed on teardown)."""
    f = open(log_path, "a", encoding="utf-8")
    yield f
    f.close()
