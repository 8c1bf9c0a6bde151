"""Pytest fixtures for stackerr tests."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from stackerr.foundation.config import reset_config


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run with an empty project dir, an empty home dir and no STACKERR_* vars.

    Yields the project directory (the cwd). The home directory is its
    sibling ``home``.
    """
    project = tmp_path / "project"
    home = tmp_path / "home"
    project.mkdir()
    home.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setenv("HOME", str(home))
    for var in [v for v in os.environ if v.startswith("STACKERR_")]:
        monkeypatch.delenv(var)

    reset_config()
    yield project
    reset_config()


@pytest.fixture
def restore_root_logging() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after configure_logging() runs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
