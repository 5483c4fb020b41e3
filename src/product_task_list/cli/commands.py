# src/product_task_list/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import TASK_MAX_LEN, TASK_MIN_LEN, validate_task_text
from ..ui.view import build_view, render_text

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NO_PRODUCT = "No product selected. Use /product <id>."


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw_args: bool = False,
    ) -> None:
        """raw_args=True hands the handler the rest of the line as one untouched argument."""
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        keys = [key, *(a.lower() for a in aliases)]
        for k in keys[1:]:
            self._handlers[k] = handler
        if raw_args:
            self._raw.update(keys)

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]
        if name in self._raw:
            rest = line[1:].lstrip()[len(parts[0]) :].strip()
            args = [rest] if rest else []

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_panel(state: AppState) -> str:
    return render_text(build_view(state.panel))


def _position(args: list[str], size: int, what: str) -> int | str:
    """Parse a 1-based position from args; return the 0-based index or an error string."""
    if not args:
        return f"Usage: /{what} <n>."
    try:
        n = int(args[0])
    except ValueError:
        return f"Not a number: {args[0]!r}."
    if not 1 <= n <= size:
        return f"No item #{n} (1-{size})." if size else "Nothing to pick from."
    return n - 1


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    s = state.settings
    st = state.panel.state
    products = "ON" if state.products is not None else "OFF (no admin token)"
    return (
        "Status:\n"
        f"  Product: {st.product_id or '-'}\n"
        f"  Tasks: {len(st.tasks)} ({state.panel.pending_count} pending)\n"
        f"  Store: {getattr(s, 'store_url', '-')} table={getattr(s, 'store_table', '-')}\n"
        f"  Suggestions: {products}"
    )


def cmd_show(state: AppState, args: list[str]) -> str:
    return render_panel(state)


def cmd_product(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /product        -> show the selected product id
    /product <id>   -> select a product (numeric id or gid://shopify/Product/<n>)
    """
    if not args:
        return f"Selected product: {state.panel.state.product_id or '-'}"

    if emit:
        with contextlib.suppress(Exception):
            emit("Cargando tareas...")

    try:
        state.panel.select_product(args[0])
    except ValueError as e:
        logger.debug("Rejected product id %r: %s", args[0], e)
        return str(e)
    return render_panel(state)


def cmd_refresh(state: AppState, args: list[str]) -> str:
    if not state.panel.state.product_id:
        return NO_PRODUCT
    state.panel.refresh()
    return render_panel(state)


def submit_text(state: AppState, text: str) -> str:
    """Type text into the new-task field and submit it, as-is."""
    if not state.panel.state.product_id:
        return NO_PRODUCT
    try:
        validate_task_text(text)
    except ValueError:
        return f"La tarea debe tener entre {TASK_MIN_LEN} y {TASK_MAX_LEN} caracteres."
    state.panel.set_draft(text)
    state.panel.add_task()
    return render_panel(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    return submit_text(state, args[0] if args else "")


def cmd_use(state: AppState, args: list[str]) -> str:
    idx = _position(args, len(state.panel.state.suggestions), "use")
    if isinstance(idx, str):
        return idx
    state.panel.use_suggestion(idx)
    return render_panel(state)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    tasks = state.panel.state.tasks
    idx = _position(args, len(tasks), "toggle")
    if isinstance(idx, str):
        return idx
    state.panel.toggle(tasks[idx].id)
    return render_panel(state)


def cmd_delete(state: AppState, args: list[str]) -> str:
    tasks = state.panel.state.tasks
    idx = _position(args, len(tasks), "delete")
    if isinstance(idx, str):
        return idx
    state.panel.delete(tasks[idx].id)
    return render_panel(state)


def cmd_clear(state: AppState, args: list[str]) -> str:
    if not any(t.completed for t in state.panel.state.tasks):
        return "No completed tasks to clear."
    state.panel.clear_completed()
    return render_panel(state)


def cmd_dismiss(state: AppState, args: list[str]) -> str:
    state.panel.dismiss_error()
    return render_panel(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show selected product and backend settings.")
registry.register("product", cmd_product, help_text="Select a product: /product <id>.")
registry.register("show", cmd_show, help_text="Render the panel again.")
registry.register("refresh", cmd_refresh, help_text="Reload tasks and suggestions.")
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <text> (plain text works too; use /add for text starting with /).",
    raw_args=True,
)
registry.register("use", cmd_use, help_text="Add suggestion #n as a task: /use <n>.")
registry.register("toggle", cmd_toggle, help_text="Mark task #n done/undone.", aliases=["done", "check"])
registry.register("delete", cmd_delete, help_text="Delete task #n.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all completed tasks.")
registry.register("dismiss", cmd_dismiss, help_text="Hide the error banner.")
