"""Tests for logcarp.config — environment switches and precedence."""

import argparse

from logcarp.config import ENV_VARS, load_env_config, resolve_config


class TestLoadEnvConfig:
    """Test load_env_config()."""

    def test_reads_all_switches(self):
        environ = {var: f"value-{key}" for key, var in ENV_VARS.items()}
        cfg = load_env_config(environ)
        assert cfg == {key: f"value-{key}" for key in ENV_VARS}

    def test_blank_is_unset(self):
        cfg = load_env_config({"LOGCARP_DEBUGLEVEL": "   "})
        assert "debug_level" not in cfg

    def test_values_stripped(self):
        cfg = load_env_config({"LOGCARP_LOGLEVEL": " on \n"})
        assert cfg["log_level"] == "on"

    def test_uses_os_environ(self, monkeypatch):
        monkeypatch.setenv("LOGCARP_PROGRAM", "from-env")
        assert load_env_config()["program"] == "from-env"


class TestResolveConfig:
    """Test explicit > environment precedence."""

    def test_all_keys_present(self):
        resolved = resolve_config(environ={})
        assert set(resolved) == set(ENV_VARS)
        assert all(v is None for v in resolved.values())

    def test_environment_fills_gaps(self):
        resolved = resolve_config({"debug_level": None},
                                  environ={"LOGCARP_DEBUGLEVEL": "2"})
        assert resolved["debug_level"] == "2"

    def test_explicit_wins(self):
        resolved = resolve_config({"log_level": 0},
                                  environ={"LOGCARP_LOGLEVEL": "1"})
        assert resolved["log_level"] == 0

    def test_namespace_accepted(self):
        ns = argparse.Namespace(program="ns-prog", error=None)
        resolved = resolve_config(ns, keys=["program", "error"],
                                  environ={"LOGCARP_ERRFILE": "/tmp/e.log"})
        assert resolved == {"program": "ns-prog", "error": "/tmp/e.log"}
