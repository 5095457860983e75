# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the codec and the store into AppState,
- loads the task file at startup and saves it on request / at exit.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_codec import TaskFileCodec, TaskFileError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    """Best-effort: a failure here is logged; save() reports it again if it persists."""
    try:
        Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
        Path(settings.tasks_path).parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.exception("Failed to create data directories under %s", settings.data_dir)


def load_tasks(codec: TaskFileCodec) -> tuple[TaskStore, int]:
    """
    Build a store from the task file.

    Returns (store, skipped_line_count). Never raises: an unreadable file is
    logged and the session starts with an empty list.
    """
    try:
        result = codec.load()
    except TaskFileError:
        logger.exception("Failed to load tasks from %s; starting empty.", codec.path)
        return TaskStore(), 0

    store = TaskStore.from_load_result(result)
    skipped = result.skipped if result is not None else 0
    return store, skipped


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    codec = TaskFileCodec(settings.tasks_path)
    store, skipped = load_tasks(codec)
    logger.info("TaskStore ready path=%s total=%d next_id=%d", codec.path, len(store), store.next_id)

    return AppState(settings=settings, store=store, codec=codec, load_skipped=skipped)


def save_tasks(state: AppState) -> bool:
    """Write the current list to disk. Returns False (and logs) on I/O failure."""
    try:
        state.codec.save(state.store.list())
    except TaskFileError:
        logger.exception("Failed to save tasks to %s", state.codec.path)
        return False
    state.dirty = False
    logger.info("Saved %d tasks to %s", len(state.store), state.codec.path)
    return True
