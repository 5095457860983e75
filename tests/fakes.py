# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from tasklist.tasks.task_codec import LoadResult, TaskFileError
from tasklist.tasks.task_models import Task


class FailingCodec:
    """
    Codec double whose save() always fails, as if the file were read-only.

    Captures save attempts for assertions.
    """

    def __init__(self, path: str | Path = "unwritable/tasks.txt") -> None:
        self.path = Path(path)
        self.save_calls = 0

    def load(self) -> LoadResult | None:
        return None

    def save(self, tasks: Iterable[Task]) -> None:
        self.save_calls += 1
        raise TaskFileError(f"permission denied: {self.path}")


class ScriptedInput:
    """
    Feeds canned lines to run_console_loop; raises EOFError when exhausted.

    An exception instance in the script (e.g. KeyboardInterrupt()) is raised instead of returned.
    """

    def __init__(self, lines: list[str | BaseException]) -> None:
        self._lines = list(lines)
        self.prompts: list[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        item = self._lines.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item
