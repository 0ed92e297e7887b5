"""Shared fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers and level changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that change runtime settings."""
    for name in ("RUSTC", "CARGO", "CARGO_WHEN_CONFIG", "CARGO_WHEN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
