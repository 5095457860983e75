# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_codec import TaskFileCodec
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (real Settings or a test double with the same attributes).
    settings: object

    store: TaskStore
    codec: TaskFileCodec

    # Lines dropped by the startup load (malformed records).
    load_skipped: int = 0

    # True when the store changed since the last successful save.
    dirty: bool = False
