"""Shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def console_home(tmp_path, monkeypatch):
    """Keep config and log files out of the real home directory."""
    home = tmp_path / "debug-console"
    monkeypatch.setenv("DEBUG_CONSOLE_HOME", str(home))
    return home
