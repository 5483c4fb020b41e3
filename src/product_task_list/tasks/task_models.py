# src/product_task_list/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

TASK_MIN_LEN = 3
TASK_MAX_LEN = 100

PRODUCT_GID_PREFIX = "gid://shopify/Product/"
_PRODUCT_GID_RE = re.compile(r"^gid://shopify/Product/\d+$")

TaskId = int | str

_TRUE_STRINGS = {"true", "t", "1", "yes"}


def _as_bool(raw: Any) -> bool:
    """Real booleans pass through; strings are parsed (PostgREST text casts), anything else is False."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUE_STRINGS
    if isinstance(raw, int):
        return raw == 1
    return False


@dataclass(slots=True)
class TaskRow:
    """
    One checklist row as stored in the hosted table.

    The remote store owns the row; the panel keeps a transient copy.
    """

    id: TaskId
    product_id: str
    task: str
    completed: bool
    created_at: str | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> TaskRow:
        if not isinstance(raw, dict) or raw.get("id") is None:
            raise ValueError(f"not a task row: {raw!r}")
        return cls(
            id=raw["id"],
            product_id=str(raw.get("product_id") or ""),
            task=str(raw.get("task") or ""),
            completed=_as_bool(raw.get("completed")),
            created_at=raw.get("created_at"),
        )


def validate_task_text(text: str | None) -> str:
    """Return the stripped text, or raise ValueError if its length is out of range."""
    cleaned = (text or "").strip()
    if not TASK_MIN_LEN <= len(cleaned) <= TASK_MAX_LEN:
        raise ValueError(
            f"task text must be {TASK_MIN_LEN}-{TASK_MAX_LEN} characters (got {len(cleaned)})"
        )
    return cleaned


def normalize_product_id(raw: str | int | None) -> str:
    """
    Accept either a product GID or a bare numeric id; return the GID.

    Rows are keyed by the GID the admin hands out, so a bare id is expanded.
    """
    s = str(raw if raw is not None else "").strip()
    if not s:
        raise ValueError("product id is required")
    if s.isdigit():
        return f"{PRODUCT_GID_PREFIX}{s}"
    if _PRODUCT_GID_RE.match(s):
        return s
    raise ValueError(f"not a product id: {s!r}")
