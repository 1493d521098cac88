# src/taskmate/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

LineReader = Callable[[str], str]
LineWriter = Callable[[str], None]

DIVIDER = "_" * 60


def _print_block(write: LineWriter, text: str) -> None:
    write(DIVIDER)
    for line in text.splitlines():
        write(f" {line}")
    write(DIVIDER)


def run_console_loop(
    state: AppState,
    read_line: LineReader = input,
    write: LineWriter = print,
) -> None:
    """
    Read one command at a time until `bye`, EOF or Ctrl+C.

    `read_line`/`write` default to input()/print(); tests pass scripted ones.
    """
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskmate"))
    logger.info("Console started with %d tasks.", state.tasks.size())

    greeting = f"Hello! I'm {app_name}.\nWhat can I do for you?\n\n{command_registry.build_help()}"
    if state.load_warning:
        greeting = f"[warning] {state.load_warning}\nStarting with an empty list.\n\n{greeting}"
    _print_block(write, greeting)

    while True:
        try:
            user_input = read_line("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        try:
            reply = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed on %r.", user_input)
            _print_block(write, "Internal error while handling that command.")
            continue

        _print_block(write, reply.text)
        if reply.exit:
            break

    logger.info("Console connector finished.")
