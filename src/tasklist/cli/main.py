# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the task file), runs the console
REPL, then saves the list once on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort final save. A failure is reported but never blocks exit."""
    if not getattr(state.settings, "save_on_exit", True):
        logger.info("Save on exit disabled; %d tasks not written.", len(state.store))
        return
    if save_tasks(state):
        print(f"Saved {len(state.store)} tasks to {state.codec.path}.")
    else:
        print(f"WARNING: could not save tasks to {state.codec.path}. See the log for details.")


def main() -> None:
    settings = get_settings()

    console_level = level_from_name(settings.log_level)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    if state.load_skipped:
        print(
            f"WARNING: skipped {state.load_skipped} malformed line(s) in {state.codec.path}. "
            "They will be dropped on the next save."
        )

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
