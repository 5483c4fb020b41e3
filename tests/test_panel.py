# tests/test_panel.py

from __future__ import annotations

import pytest

from product_task_list.core.panel import (
    MSG_ADD_FAILED,
    MSG_ADDED,
    MSG_CLEAR_FAILED,
    MSG_CLEARED,
    MSG_DELETE_FAILED,
    MSG_LOAD_FAILED,
    MSG_TOGGLE_FAILED,
    TaskPanel,
)
from product_task_list.core.suggestions import SUGGEST_DESCRIPTION, SUGGEST_IMAGE, SUGGEST_TITLE
from product_task_list.tasks.task_models import TaskRow

from .conftest import PRODUCT
from .fakes import FakeProductSource, FakeTaskRepo


def test_select_product_loads_tasks_and_suggestions(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product("1")

    st = panel.state
    assert st.product_id == PRODUCT
    assert [t.id for t in st.tasks] == [2, 1]
    assert st.suggestions == [SUGGEST_IMAGE, SUGGEST_DESCRIPTION, SUGGEST_TITLE]
    assert st.loading is False
    assert st.error is None
    assert ("list", (PRODUCT,)) in repo.calls


def test_existing_task_hides_matching_suggestion(repo: FakeTaskRepo, panel: TaskPanel) -> None:
    repo.rows.insert(0, TaskRow(3, PRODUCT, SUGGEST_IMAGE, False))

    panel.select_product(PRODUCT)

    assert SUGGEST_IMAGE not in panel.state.suggestions


def test_select_product_ignores_blank_and_rejects_garbage(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product(None)
    panel.select_product("  ")
    assert panel.state.product_id is None
    assert repo.calls == []

    with pytest.raises(ValueError):
        panel.select_product("not-a-product")


def test_load_failure_shows_error(panel: TaskPanel, repo: FakeTaskRepo, products: FakeProductSource) -> None:
    repo.fail.add("list")

    panel.select_product(PRODUCT)

    assert panel.state.error == MSG_LOAD_FAILED
    assert panel.state.loading is False
    assert panel.state.tasks == []
    assert products.calls == []


def test_refresh_failure_keeps_previous_list(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product(PRODUCT)
    repo.fail.add("list")

    panel.refresh()

    assert [t.id for t in panel.state.tasks] == [2, 1]
    assert panel.state.error == MSG_LOAD_FAILED
    assert panel.state.loading is False


def test_product_read_failure_only_drops_suggestions(repo: FakeTaskRepo, clock) -> None:
    panel = TaskPanel(repo, FakeProductSource(fail=True), clock=clock)

    panel.select_product(PRODUCT)

    assert [t.id for t in panel.state.tasks] == [2, 1]
    assert panel.state.suggestions == []
    assert panel.state.error is None


def test_missing_product_or_no_source_means_no_suggestions(repo: FakeTaskRepo, clock) -> None:
    panel = TaskPanel(repo, FakeProductSource(None), clock=clock)
    panel.select_product(PRODUCT)
    assert panel.state.suggestions == []

    panel = TaskPanel(repo, None, clock=clock)
    panel.select_product(PRODUCT)
    assert panel.state.suggestions == []


def test_add_task_from_draft(panel: TaskPanel, clock) -> None:
    panel.select_product(PRODUCT)
    panel.set_draft("  Traducir descripción  ")

    saved = panel.add_task()

    assert saved is not None
    assert panel.state.tasks[0].task == "Traducir descripción"
    assert panel.state.draft == ""
    assert panel.visible_success() == MSG_ADDED

    clock.advance(2.9)
    assert panel.visible_success() == MSG_ADDED
    clock.advance(0.2)
    assert panel.visible_success() is None


def test_add_suggestion_removes_it_and_keeps_draft(panel: TaskPanel) -> None:
    panel.select_product(PRODUCT)
    panel.set_draft("borrador")

    saved = panel.use_suggestion(1)

    assert saved is not None and saved.task == SUGGEST_DESCRIPTION
    assert panel.state.suggestions == [SUGGEST_IMAGE, SUGGEST_TITLE]
    assert panel.state.draft == "borrador"

    with pytest.raises(IndexError):
        panel.use_suggestion(5)


def test_add_task_rejects_bad_text_and_missing_product(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    assert panel.add_task("Sin producto") is None

    panel.select_product(PRODUCT)
    assert panel.add_task("ab") is None
    assert panel.add_task("x" * 101) is None
    assert [c for c in repo.calls if c[0] == "add"] == []


def test_add_task_failure(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product(PRODUCT)
    repo.fail.add("add")
    panel.set_draft("Revisar stock")

    assert panel.add_task() is None
    assert panel.state.error == MSG_ADD_FAILED
    assert panel.state.draft == "Revisar stock"
    assert len(panel.state.tasks) == 2

    panel.dismiss_error()
    assert panel.state.error is None


def test_toggle_is_optimistic_and_reverts_on_failure(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product(PRODUCT)

    assert panel.toggle(2) is True
    assert panel.find_task(2).completed is True
    assert ("set_completed", (2, True)) in repo.calls

    repo.fail.add("set_completed")
    assert panel.toggle(2) is False
    assert panel.find_task(2).completed is True
    assert panel.state.error == MSG_TOGGLE_FAILED

    assert panel.toggle(404) is False


def test_delete(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product(PRODUCT)

    assert panel.delete(2) is True
    assert [t.id for t in panel.state.tasks] == [1]

    repo.fail.add("delete")
    assert panel.delete(1) is False
    assert panel.state.error == MSG_DELETE_FAILED
    assert [t.id for t in panel.state.tasks] == [1]


def test_clear_completed(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product(PRODUCT)

    assert panel.clear_completed() == 1
    assert ("delete_many", ([1],)) in repo.calls
    assert [t.id for t in panel.state.tasks] == [2]
    assert panel.visible_success() == MSG_CLEARED

    # nothing completed left -> no request
    calls = len(repo.calls)
    assert panel.clear_completed() == 0
    assert len(repo.calls) == calls


def test_clear_completed_failure(panel: TaskPanel, repo: FakeTaskRepo) -> None:
    panel.select_product(PRODUCT)
    repo.fail.add("delete_many")

    assert panel.clear_completed() == 0
    assert panel.state.error == MSG_CLEAR_FAILED
    assert len(panel.state.tasks) == 2


def test_pending_count_and_all_completed(panel: TaskPanel) -> None:
    assert panel.all_completed is False

    panel.select_product(PRODUCT)
    assert panel.pending_count == 1
    assert panel.all_completed is False

    panel.toggle(2)
    assert panel.pending_count == 0
    assert panel.all_completed is True
