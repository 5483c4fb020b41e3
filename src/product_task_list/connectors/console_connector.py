# src/product_task_list/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_panel, submit_text
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit", "/close")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str, emit=None) -> str:
    """
    One console input -> one reply.

    Slash commands go through the registry; anything else is typed into the
    "Nueva tarea" field and submitted verbatim. Text that itself starts with
    "/" has to go through /add.
    """
    cmd_response = command_registry.handle(state, line, emit=emit)
    if cmd_response is not None:
        return cmd_response
    return submit_text(state, line)


def run_console_loop(state: AppState) -> None:
    logger.info("Console panel started (product=%s).", state.panel.state.product_id)
    _print_ts(
        "[CONSOLE] Type a task to add it (use /add for text starting with /). "
        "Use /help for commands. Use /close to quit.\n"
    )
    print(render_panel(state))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> ").strip()
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
            reply = handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        print(f"[{_ts_local()}] {reply}\n")

    logger.info("Console panel finished.")
