# src/product_task_list/ui/view.py

"""
Declarative view tree for the task panel, plus a plain-text renderer.

build_view() is a pure function of the panel state (and the clock for the
success banner). Numbers shown next to suggestions and tasks are the
1-based positions the console commands take.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from ..core.panel import TaskPanel

PANEL_TITLE = "Tareas del producto"
ALL_DONE_TEXT = "🎉 ¡Todas las tareas están completadas! El producto está listo para publicar."
EMPTY_TEXT = "No hay tareas registradas."
DIVIDER_WIDTH = 48


class Tone(StrEnum):
    DEFAULT = "default"
    CRITICAL = "critical"
    SUCCESS = "success"
    INFO = "info"


@dataclass
class Node:
    children: list[Node] = field(default_factory=list)


@dataclass
class AdminAction(Node):
    title: str = ""
    secondary_action: Button | None = None


@dataclass
class BlockStack(Node):
    pass


@dataclass
class InlineStack(Node):
    pass


@dataclass
class Box(Node):
    pass


@dataclass
class Banner(Node):
    text: str = ""
    tone: Tone = Tone.DEFAULT
    dismissible: bool = False


@dataclass
class Text(Node):
    text: str = ""
    bold: bool = False
    italic: bool = False
    subdued: bool = False


@dataclass
class Badge(Node):
    text: str = ""
    tone: Tone = Tone.INFO


@dataclass
class Button(Node):
    label: str = ""
    command: str | None = None
    variant: str = "secondary"
    tone: Tone = Tone.DEFAULT
    disabled: bool = False


@dataclass
class TextField(Node):
    label: str = ""
    value: str = ""
    placeholder: str = ""


@dataclass
class Checkbox(Node):
    checked: bool = False
    command: str | None = None


@dataclass
class Divider(Node):
    pass


@dataclass
class ProgressIndicator(Node):
    pass


def _suggestions_box(suggestions: list[str]) -> Box:
    rows: list[Node] = [
        InlineStack(
            children=[
                Text(text=f"{i}. {text}"),
                Button(label="Usar", command=f"/use {i}", variant="tertiary"),
            ]
        )
        for i, text in enumerate(suggestions, start=1)
    ]
    return Box(
        children=[
            Text(text="Sugerencias automáticas:", bold=True),
            BlockStack(children=rows),
        ]
    )


def _new_task_box(draft: str) -> Box:
    return Box(
        children=[
            TextField(label="Nueva tarea", value=draft, placeholder="Ej. revisar descripción"),
            InlineStack(
                children=[
                    Button(
                        label="Agregar tarea",
                        command="/add <texto>",
                        variant="primary",
                        disabled=not draft.strip(),
                    )
                ]
            ),
        ]
    )


def _task_list(panel: TaskPanel) -> list[Node]:
    st = panel.state
    if st.loading:
        return [ProgressIndicator()]
    if not st.tasks:
        return [Text(text=EMPTY_TEXT, subdued=True)]

    out: list[Node] = []
    if panel.all_completed:
        out.append(Banner(text=ALL_DONE_TEXT, tone=Tone.SUCCESS))

    out.append(
        InlineStack(
            children=[
                Text(text="Tareas actuales", bold=True, italic=True),
                Badge(text=f"{panel.pending_count} pendientes", tone=Tone.INFO),
            ]
        )
    )
    for i, t in enumerate(st.tasks, start=1):
        out.append(
            Box(
                children=[
                    InlineStack(
                        children=[
                            Checkbox(checked=t.completed, command=f"/toggle {i}"),
                            Text(text=f"{i}. {t.task}", subdued=t.completed),
                            Button(
                                label="Eliminar",
                                command=f"/delete {i}",
                                variant="tertiary",
                                tone=Tone.CRITICAL,
                            ),
                        ]
                    )
                ]
            )
        )
    return out


def build_view(panel: TaskPanel, now: float | None = None) -> AdminAction:
    st = panel.state
    body: list[Node] = []

    if st.error:
        body.append(Banner(text=st.error, tone=Tone.CRITICAL, dismissible=True))

    success = panel.visible_success(now)
    if success:
        body.append(Banner(text=success, tone=Tone.SUCCESS))

    if st.suggestions:
        body.append(_suggestions_box(st.suggestions))

    body.append(_new_task_box(st.draft))
    body.append(Divider())
    body.append(BlockStack(children=_task_list(panel)))

    return AdminAction(
        title=PANEL_TITLE,
        secondary_action=Button(label="Cerrar", command="/close"),
        children=[BlockStack(children=body)],
    )


# ---- text rendering ----


def _render_inline(node: Node) -> str:
    if isinstance(node, Text):
        s = node.text
        if node.italic:
            s = f"_{s}_"
        if node.bold:
            s = f"*{s}*"
        return s
    if isinstance(node, Badge):
        return f"[{node.text}]"
    if isinstance(node, Button):
        if node.disabled:
            return f"<{node.label} (desactivado)>"
        return f"<{node.label}: {node.command}>" if node.command else f"<{node.label}>"
    if isinstance(node, Checkbox):
        return "[x]" if node.checked else "[ ]"
    return " ".join(_render_inline(c) for c in node.children)


def _render(node: Node, indent: int, lines: list[str]) -> None:
    pad = " " * indent

    if isinstance(node, AdminAction):
        lines.append(f"{pad}== {node.title} ==")
        for c in node.children:
            _render(c, indent, lines)
        if node.secondary_action is not None:
            lines.append(f"{pad}{_render_inline(node.secondary_action)}")
        return

    if isinstance(node, Banner):
        marker = {Tone.CRITICAL: "[!]", Tone.SUCCESS: "[ok]"}.get(node.tone, "[i]")
        hint = "  (/dismiss)" if node.dismissible else ""
        lines.append(f"{pad}{marker} {node.text}{hint}")
        return

    if isinstance(node, Box):
        for c in node.children:
            _render(c, indent + 2, lines)
        return

    if isinstance(node, BlockStack):
        for c in node.children:
            _render(c, indent, lines)
        return

    if isinstance(node, TextField):
        value = node.value if node.value else f"({node.placeholder})"
        lines.append(f"{pad}{node.label}: {value}")
        return

    if isinstance(node, Divider):
        lines.append(pad + "-" * DIVIDER_WIDTH)
        return

    if isinstance(node, ProgressIndicator):
        lines.append(f"{pad}Cargando...")
        return

    if isinstance(node, InlineStack):
        lines.append(pad + "  ".join(_render_inline(c) for c in node.children))
        return

    # Text, Badge, Button, Checkbox
    lines.append(pad + _render_inline(node))


def render_text(node: Node) -> str:
    lines: list[str] = []
    _render(node, 0, lines)
    return "\n".join(lines)
