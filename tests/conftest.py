# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.cli.bootstrap import create_initial_state
from tasklist.core.state import AppState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="WARNING",
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.txt",
        log_dir=data_dir,
        save_on_exit=True,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired through the real bootstrap (empty task file)."""
    return create_initial_state(settings=settings)
