# src/product_task_list/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .panel import TaskPanel
from .ports import ProductSource, TaskRepo


@dataclass
class AppState:
    # Settings kept on the state so commands can read them (tests pass a SimpleNamespace).
    settings: Any

    task_store: TaskRepo
    products: ProductSource | None
    panel: TaskPanel
