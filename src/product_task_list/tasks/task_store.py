# src/product_task_list/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from ..http_client import build_client, describe_http_error
from .task_models import TaskId, TaskRow, validate_task_text

logger = logging.getLogger(__name__)

_RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class TaskStoreError(RuntimeError):
    """A request to the hosted table failed (transport, HTTP status or payload)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TaskStore:
    """
    REST client for the hosted `product_tasks` table (PostgREST dialect).

    Rows are filtered with PostgREST operators in the query string:
    - product_id=eq.<gid>
    - id=eq.<id>
    - id=in.(<id>,<id>,...)

    One httpx.Client per store; call close() on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        table: str = "product_tasks",
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise RuntimeError("Task store URL is not set. Set PTL_STORE_URL (or SUPABASE_URL) in your .env.")
        if not api_key or not api_key.strip():
            raise RuntimeError("Task store key is not set. Set PTL_STORE_KEY (or SUPABASE_KEY) in your .env.")

        self._table = table
        self._client = build_client(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            transport=transport,
        )
        logger.info("TaskStore ready url=%s table=%s", base_url, table)

    def close(self) -> None:
        self._client.close()

    # ---- low-level helpers ----

    def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            resp = self._client.request(method, f"/{self._table}", params=params, json=json, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            status, detail = describe_http_error(e)
            logger.warning("TaskStore %s failed: %s", method, detail)
            raise TaskStoreError(f"{method} {self._table} failed ({detail})", status_code=status) from e
        return resp

    @staticmethod
    def _rows(resp: httpx.Response) -> list[TaskRow]:
        # DELETE/PATCH without representation come back as 204 with no body.
        if resp.status_code == 204 or not resp.content:
            return []
        try:
            data = resp.json()
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [TaskRow.from_api(item) for item in data]
        except ValueError as e:
            raise TaskStoreError(f"unexpected response from task store: {e}", status_code=resp.status_code) from e

    # ---- public API ----

    def list_tasks(self, product_id: str) -> list[TaskRow]:
        """All rows for the product, newest first."""
        resp = self._request(
            "GET",
            params={"product_id": f"eq.{product_id}", "order": "created_at.desc"},
        )
        rows = self._rows(resp)
        logger.debug("Listed %d tasks product_id=%s", len(rows), product_id)
        return rows

    def add_task(self, product_id: str, text: str) -> TaskRow:
        task = validate_task_text(text)
        if not product_id:
            raise ValueError("product_id is required")

        resp = self._request(
            "POST",
            json={"product_id": product_id, "task": task, "completed": False},
            headers=_RETURN_REPRESENTATION,
        )
        rows = self._rows(resp)
        if not rows:
            raise TaskStoreError("task store did not return the created row", status_code=resp.status_code)
        logger.debug("Task added id=%s product_id=%s", rows[0].id, product_id)
        return rows[0]

    def set_completed(self, task_id: TaskId, completed: bool) -> TaskRow | None:
        resp = self._request(
            "PATCH",
            params={"id": f"eq.{task_id}"},
            json={"completed": bool(completed)},
            headers=_RETURN_REPRESENTATION,
        )
        rows = self._rows(resp)
        logger.debug("Task id=%s completed=%s", task_id, completed)
        return rows[0] if rows else None

    def delete_task(self, task_id: TaskId) -> None:
        self._request("DELETE", params={"id": f"eq.{task_id}"}, headers=_RETURN_REPRESENTATION)
        logger.debug("Task deleted id=%s", task_id)

    def delete_tasks(self, task_ids: Iterable[TaskId]) -> int:
        """Bulk delete by id. Returns how many rows the store reports as deleted."""
        ids = [str(i) for i in task_ids]
        if not ids:
            return 0
        resp = self._request(
            "DELETE",
            params={"id": f"in.({','.join(ids)})"},
            headers=_RETURN_REPRESENTATION,
        )
        deleted = len(self._rows(resp))
        logger.debug("Bulk delete requested=%d deleted=%d", len(ids), deleted)
        return deleted
