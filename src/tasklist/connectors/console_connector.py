# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import LITERAL_PREFIX, add_task_from_line
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = ">>> "
EXIT_COMMANDS = ("/exit", "/quit")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState, *, input_fn=input) -> None:
    """
    Read lines until /exit, EOF or Ctrl+C.

    Slash commands go through the registry; any other non-empty line becomes a new task.
    Saving on exit is the caller's job.
    """
    logger.info("Console connector started (tasks=%d).", len(state.store))
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input_fn(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            if user_input.startswith(LITERAL_PREFIX):
                # "//etc backup" adds the task "/etc backup".
                response = add_task_from_line(state, user_input[1:])
            else:
                response = command_registry.handle(state, user_input, emit=emit)
                if response is None:
                    response = add_task_from_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        _print_ts(response)

    logger.info("Console connector finished.")
