# tests/test_task_store.py

from __future__ import annotations

import json

import httpx
import pytest

from product_task_list.tasks.task_store import TaskStore, TaskStoreError

PRODUCT = "gid://shopify/Product/1"


def _row(id_, task="Revisar precio", completed=False) -> dict:
    return {
        "id": id_,
        "product_id": PRODUCT,
        "task": task,
        "completed": completed,
        "created_at": "2026-10-17T10:00:00+00:00",
    }


def _store(handler) -> tuple[TaskStore, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    store = TaskStore(
        "https://example.supabase.co/",
        "anon-key",
        transport=httpx.MockTransport(record),
    )
    return store, seen


def test_list_tasks_filters_by_product_and_orders_newest_first() -> None:
    store, seen = _store(lambda r: httpx.Response(200, json=[_row(2), _row(1)]))

    rows = store.list_tasks(PRODUCT)

    assert [r.id for r in rows] == [2, 1]
    req = seen[0]
    assert req.method == "GET"
    assert req.url.host == "example.supabase.co"
    assert req.url.path == "/rest/v1/product_tasks"
    assert req.url.params["product_id"] == f"eq.{PRODUCT}"
    assert req.url.params["order"] == "created_at.desc"
    assert req.headers["apikey"] == "anon-key"
    assert req.headers["authorization"] == "Bearer anon-key"


def test_add_task_posts_row_and_returns_representation() -> None:
    store, seen = _store(lambda r: httpx.Response(201, json=[_row(5, "Revisar título")]))

    saved = store.add_task(PRODUCT, "  Revisar título  ")

    assert saved.id == 5
    req = seen[0]
    assert req.method == "POST"
    assert req.headers["prefer"] == "return=representation"
    assert json.loads(req.content) == {"product_id": PRODUCT, "task": "Revisar título", "completed": False}


def test_add_task_validates_before_any_request() -> None:
    store, seen = _store(lambda r: httpx.Response(201, json=[]))

    with pytest.raises(ValueError):
        store.add_task(PRODUCT, "ab")
    assert seen == []


def test_add_task_without_returned_row_is_an_error() -> None:
    store, _ = _store(lambda r: httpx.Response(201, json=[]))

    with pytest.raises(TaskStoreError):
        store.add_task(PRODUCT, "Revisar título")


def test_set_completed_patches_single_row() -> None:
    store, seen = _store(lambda r: httpx.Response(200, json=[_row(5, completed=True)]))

    updated = store.set_completed(5, True)

    assert updated is not None and updated.completed is True
    req = seen[0]
    assert req.method == "PATCH"
    assert req.url.params["id"] == "eq.5"
    assert json.loads(req.content) == {"completed": True}


def test_delete_task_and_no_content_response() -> None:
    store, seen = _store(lambda r: httpx.Response(204))

    store.delete_task(5)

    assert seen[0].method == "DELETE"
    assert seen[0].url.params["id"] == "eq.5"


def test_delete_tasks_uses_in_filter() -> None:
    store, seen = _store(lambda r: httpx.Response(200, json=[_row(1), _row(3)]))

    assert store.delete_tasks([1, 3]) == 2
    assert seen[0].url.params["id"] == "in.(1,3)"


def test_delete_tasks_empty_is_a_noop() -> None:
    store, seen = _store(lambda r: httpx.Response(500))

    assert store.delete_tasks([]) == 0
    assert seen == []


def test_http_error_status_is_kept() -> None:
    store, _ = _store(lambda r: httpx.Response(401, json={"message": "Invalid API key"}))

    with pytest.raises(TaskStoreError) as exc_info:
        store.list_tasks(PRODUCT)
    assert exc_info.value.status_code == 401


def test_transport_error_is_wrapped() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store, _ = _store(boom)

    with pytest.raises(TaskStoreError) as exc_info:
        store.list_tasks(PRODUCT)
    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_unexpected_payload_is_an_error() -> None:
    store, _ = _store(lambda r: httpx.Response(200, json={"rows": []}))

    with pytest.raises(TaskStoreError):
        store.list_tasks(PRODUCT)


def test_missing_credentials() -> None:
    with pytest.raises(RuntimeError, match="URL is not set"):
        TaskStore("", "key")
    with pytest.raises(RuntimeError, match="key is not set"):
        TaskStore("https://example.supabase.co", "")
