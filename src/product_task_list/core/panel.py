# src/product_task_list/core/panel.py

"""
Panel view state and the operations behind its buttons.

Flow mirrors the admin action it replaces:
- selecting a product fetches its rows, then evaluates suggestions
- create / toggle / delete / clear-completed hit the store and patch
  the local list instead of refetching
- failures become a dismissible error banner; successes a short-lived banner
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..shopify.admin_client import AdminApiError
from ..tasks.task_models import TaskId, TaskRow, normalize_product_id, validate_task_text
from ..tasks.task_store import TaskStoreError
from .ports import ProductSource, TaskRepo
from .suggestions import evaluate_suggestions

logger = logging.getLogger(__name__)

MSG_LOAD_FAILED = "Error al cargar las tareas"
MSG_ADD_FAILED = "No se pudo agregar la tarea"
MSG_TOGGLE_FAILED = "No se pudo actualizar la tarea"
MSG_DELETE_FAILED = "No se pudo eliminar la tarea"
MSG_CLEAR_FAILED = "No se pudieron eliminar las tareas completadas"
MSG_ADDED = "Tarea agregada con éxito"
MSG_CLEARED = "Tareas completadas eliminadas"


@dataclass
class PanelState:
    product_id: str | None = None
    draft: str = ""
    tasks: list[TaskRow] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    success: str | None = None
    success_until: float = 0.0


class TaskPanel:
    def __init__(
        self,
        task_repo: TaskRepo,
        products: ProductSource | None = None,
        *,
        success_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.task_repo = task_repo
        self.products = products
        self.success_seconds = success_seconds
        self._clock = clock
        self.state = PanelState()

    # ---- derived ----

    @property
    def pending_count(self) -> int:
        return sum(1 for t in self.state.tasks if not t.completed)

    @property
    def all_completed(self) -> bool:
        return bool(self.state.tasks) and all(t.completed for t in self.state.tasks)

    def visible_success(self, now: float | None = None) -> str | None:
        """Success message if it hasn't expired yet. Read-only: expiry is decided by the clock."""
        if self.state.success is None:
            return None
        now = self._clock() if now is None else now
        if now >= self.state.success_until:
            return None
        return self.state.success

    def find_task(self, task_id: TaskId) -> TaskRow | None:
        for t in self.state.tasks:
            if t.id == task_id:
                return t
        return None

    # ---- banners ----

    def _flash(self, message: str) -> None:
        self.state.success = message
        self.state.success_until = self._clock() + self.success_seconds

    def dismiss_error(self) -> None:
        self.state.error = None

    # ---- loading ----

    def select_product(self, raw_id: str | None) -> None:
        if raw_id is None or not str(raw_id).strip():
            return
        product_id = normalize_product_id(raw_id)
        if product_id != self.state.product_id:
            self.state.tasks = []
            self.state.suggestions = []
            self.state.draft = ""
        self.state.product_id = product_id
        logger.info("Product selected id=%s", product_id)
        self.refresh()

    def refresh(self) -> None:
        product_id = self.state.product_id
        if not product_id:
            return

        self.state.loading = True
        try:
            try:
                tasks = self.task_repo.list_tasks(product_id)
            except TaskStoreError:
                logger.debug("Loading tasks failed product_id=%s", product_id, exc_info=True)
                self.state.error = MSG_LOAD_FAILED
                return

            self.state.tasks = list(tasks)
            self._evaluate_suggestions()
        finally:
            self.state.loading = False

    def _evaluate_suggestions(self) -> None:
        product_id = self.state.product_id
        if self.products is None or not product_id:
            self.state.suggestions = []
            return

        try:
            product = self.products.fetch_product(product_id)
        except AdminApiError as e:
            logger.warning("Product read failed id=%s (%s); no suggestions", product_id, e)
            self.state.suggestions = []
            return

        if product is None:
            self.state.suggestions = []
            return

        self.state.suggestions = evaluate_suggestions(product, (t.task for t in self.state.tasks))
        logger.debug("Suggestions for %s: %s", product_id, self.state.suggestions)

    # ---- operations ----

    def set_draft(self, text: str) -> None:
        self.state.draft = text or ""

    def add_task(self, custom: str | None = None) -> TaskRow | None:
        product_id = self.state.product_id
        try:
            text = validate_task_text(self.state.draft if custom is None else custom)
        except ValueError:
            return None
        if not product_id:
            return None

        try:
            saved = self.task_repo.add_task(product_id, text)
        except TaskStoreError:
            logger.debug("Adding task failed product_id=%s", product_id, exc_info=True)
            self.state.error = MSG_ADD_FAILED
            return None

        self.state.tasks = [saved, *self.state.tasks]
        if custom is None:
            self.state.draft = ""
        self.state.suggestions = [s for s in self.state.suggestions if s != text]
        self._flash(MSG_ADDED)
        return saved

    def use_suggestion(self, index: int) -> TaskRow | None:
        if not 0 <= index < len(self.state.suggestions):
            raise IndexError(index)
        return self.add_task(self.state.suggestions[index])

    def toggle(self, task_id: TaskId) -> bool:
        """Flip completion optimistically; revert if the store rejects it."""
        task = self.find_task(task_id)
        if task is None:
            return False

        previous = task.completed
        task.completed = not previous
        try:
            self.task_repo.set_completed(task_id, task.completed)
        except TaskStoreError:
            logger.debug("Toggling task failed id=%s", task_id, exc_info=True)
            task.completed = previous
            self.state.error = MSG_TOGGLE_FAILED
            return False
        return True

    def delete(self, task_id: TaskId) -> bool:
        try:
            self.task_repo.delete_task(task_id)
        except TaskStoreError:
            logger.debug("Deleting task failed id=%s", task_id, exc_info=True)
            self.state.error = MSG_DELETE_FAILED
            return False

        self.state.tasks = [t for t in self.state.tasks if t.id != task_id]
        return True

    def clear_completed(self) -> int:
        completed_ids = [t.id for t in self.state.tasks if t.completed]
        if not completed_ids:
            return 0

        try:
            self.task_repo.delete_tasks(completed_ids)
        except TaskStoreError:
            logger.debug("Clearing completed tasks failed ids=%s", completed_ids, exc_info=True)
            self.state.error = MSG_CLEAR_FAILED
            return 0

        self.state.tasks = [t for t in self.state.tasks if not t.completed]
        self._flash(MSG_CLEARED)
        return len(completed_ids)
