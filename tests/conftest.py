"""Root test configuration: isolate every test from FMPUB_* env vars, config.yaml, and CLI logging setup"""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run from a clean tmp directory with no FMPUB_* overrides in the environment."""
    for name in list(os.environ):
        if name.startswith("FMPUB_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop root handlers installed by CLI commands (they hold the runner's closed streams)."""
    root = logging.getLogger()
    level = root.level
    before = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)
