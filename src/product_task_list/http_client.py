# src/product_task_list/http_client.py

from __future__ import annotations

from typing import Any

import httpx


def make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    """Explicit timeouts so a slow backend can't hang the console forever."""
    return httpx.Timeout(
        connect=connect_s,
        read=read_s,
        write=10.0,
        pool=connect_s,
    )


def build_client(
    *,
    base_url: str,
    headers: dict[str, str],
    connect_timeout: float = 5.0,
    read_timeout: float = 15.0,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    kwargs: dict[str, Any] = {
        "base_url": base_url,
        "headers": headers,
        "timeout": make_timeout(connect_timeout, read_timeout),
    }
    # Tests inject httpx.MockTransport here.
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.Client(**kwargs)


def describe_http_error(exc: Exception) -> tuple[int | None, str]:
    """Status code (if any) and a short detail string for logs/exceptions."""
    if isinstance(exc, httpx.HTTPStatusError):
        body = (exc.response.text or "").strip()
        if len(body) > 200:
            body = body[:200] + "..."
        return exc.response.status_code, f"HTTP {exc.response.status_code}: {body}"
    return None, f"{exc.__class__.__name__}: {exc}"
