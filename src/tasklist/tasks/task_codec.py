# src/tasklist/tasks/task_codec.py

"""
Plain-text persistence for the task list.

One task per line:

    <id>,<description>,<completed 0|1>[,<deadline>]

The deadline field is written only for timed tasks. Text fields escape
backslash, comma, CR and LF with a backslash, so a description may contain
any character. Lines without special characters are identical to the legacy
three-field format, so older files load unchanged.
"""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)

DELIMITER = ","
ESCAPE = "\\"

# Lone surrogates (e.g. undecodable terminal bytes from input()) round-trip;
# any other invalid UTF-8 in the file is still a read error.
TEXT_ERRORS = "surrogatepass"

_ESCAPES = {
    ESCAPE: ESCAPE + ESCAPE,
    DELIMITER: ESCAPE + DELIMITER,
    "\n": ESCAPE + "n",
    "\r": ESCAPE + "r",
}
_UNESCAPES = {
    ESCAPE: ESCAPE,
    DELIMITER: DELIMITER,
    "n": "\n",
    "r": "\r",
}


class TaskFileError(OSError):
    """The task file could not be read or written."""


class MalformedLineError(ValueError):
    """A single line could not be decoded into a task."""


@dataclass(slots=True)
class LoadResult:
    tasks: list[Task] = field(default_factory=list)
    skipped_lines: list[int] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.skipped_lines)

    @property
    def next_id(self) -> int:
        return max((t.id for t in self.tasks), default=0) + 1


def escape_field(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def split_fields(line: str) -> list[str]:
    """Split on unescaped delimiters and unescape each field."""
    fields: list[str] = []
    buf: list[str] = []
    chars = iter(line)
    for ch in chars:
        if ch == ESCAPE:
            nxt = next(chars, None)
            if nxt is None:
                raise MalformedLineError("dangling escape at end of line")
            if nxt not in _UNESCAPES:
                raise MalformedLineError(f"unknown escape sequence \\{nxt}")
            buf.append(_UNESCAPES[nxt])
        elif ch == DELIMITER:
            fields.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
    fields.append("".join(buf))
    return fields


def encode_line(task: Task) -> str:
    parts = [str(task.id), escape_field(task.description), "1" if task.completed else "0"]
    if task.deadline is not None:
        parts.append(escape_field(task.deadline))
    return DELIMITER.join(parts)


def decode_line(line: str) -> Task:
    fields = split_fields(line)
    if len(fields) not in (3, 4):
        raise MalformedLineError(f"expected 3 or 4 fields, got {len(fields)}")

    raw_id, description, raw_flag = fields[0], fields[1], fields[2]

    # int() would also accept "+1" or " 1"; the writer never emits those.
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise MalformedLineError(f"non-numeric id {raw_id!r}")
    task_id = int(raw_id)
    if task_id < 1:
        raise MalformedLineError(f"id must be positive, got {task_id}")

    if raw_flag not in ("0", "1"):
        raise MalformedLineError(f"completed flag must be 0 or 1, got {raw_flag!r}")

    deadline = fields[3] if len(fields) == 4 else None
    return Task(id=task_id, description=description, completed=raw_flag == "1", deadline=deadline)


class TaskFileCodec:
    """
    Reads and writes the task file.

    - load(): None if the file does not exist (first run); malformed lines are skipped
    - save(): writes a temp file next to the target, then os.replace()
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LoadResult | None:
        if not self._path.exists():
            logger.info("No task file at %s (first run).", self._path)
            return None

        try:
            text = self._path.read_text("utf-8", errors=TEXT_ERRORS)
        except (OSError, UnicodeDecodeError) as e:
            raise TaskFileError(f"cannot read task file {self._path}: {e}") from e

        result = LoadResult()
        seen: set[int] = set()
        for lineno, raw in enumerate(text.split("\n"), start=1):
            raw = raw.removesuffix("\r")
            if not raw.strip():
                continue
            try:
                task = decode_line(raw)
                if task.id in seen:
                    raise MalformedLineError(f"duplicate id {task.id}")
            except MalformedLineError as e:
                logger.warning("Skipping line %d of %s: %s", lineno, self._path, e)
                result.skipped_lines.append(lineno)
                continue
            seen.add(task.id)
            result.tasks.append(task)

        logger.info(
            "Loaded %d tasks from %s (skipped=%d)",
            len(result.tasks),
            self._path,
            result.skipped,
        )
        return result

    def save(self, tasks: Iterable[Task]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            payload = "".join(encode_line(t) + "\n" for t in tasks)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8", errors=TEXT_ERRORS)
            os.replace(tmp, self._path)
        except (OSError, UnicodeError) as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise TaskFileError(f"cannot write task file {self._path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(payload), self._path)
