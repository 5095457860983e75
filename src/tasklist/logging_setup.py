# src/tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive prompt readable:
    - allow tasklist logs (the handler level still applies)
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress third-party noise unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "tasklist" or name.startswith("tasklist."):
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path | None:
    """
    Configure logging with:
    - Console handler: filtered, stderr, so it never mixes with task output on stdout
    - File handler: full logs for debugging

    Call this ONCE, very early (before first logger.info). Returns the log file
    path, or None if the file handler could not be opened (console-only logging).
    """
    log_dir = Path(log_dir)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError:
        logging.getLogger(__name__).warning(
            "Cannot open log file %s; logging to console only.", log_file, exc_info=True
        )
        return None

    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)
    return log_file


def level_from_name(name: str | None, default: int = logging.WARNING) -> int:
    level = logging.getLevelName(str(name or "").upper())
    return level if isinstance(level, int) else default
