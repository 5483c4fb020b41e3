# src/product_task_list/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the panel.

The panel depends on Protocols instead of the concrete HTTP clients.
This keeps the backends swappable and makes testing easier.
"""

from typing import Any, Iterable, Protocol


class TaskRepo(Protocol):
    """Remote checklist rows (hosted table)."""

    def list_tasks(self, product_id: str) -> list[Any]: ...
    def add_task(self, product_id: str, text: str) -> Any: ...
    def set_completed(self, task_id: Any, completed: bool) -> Any | None: ...
    def delete_task(self, task_id: Any) -> None: ...
    def delete_tasks(self, task_ids: Iterable[Any]) -> int: ...
    def close(self) -> None: ...


class ProductSource(Protocol):
    """Product data read from the admin API (ProductDetails or None if missing)."""

    def fetch_product(self, product_id: str) -> Any | None: ...
    def close(self) -> None: ...
