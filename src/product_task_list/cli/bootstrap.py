# src/product_task_list/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data dir exists,
- wires the concrete HTTP clients into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.panel import TaskPanel
from ..core.ports import ProductSource
from ..core.state import AppState
from ..shopify.admin_client import ShopifyAdminClient
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def friendly_error_message(err: Exception) -> str:
    msg = str(err).strip() or "Configuration error."
    if "Task store URL is not set" in msg or "Task store key is not set" in msg:
        return "Task store is not configured. Set PTL_STORE_URL and PTL_STORE_KEY in .env (see config.example.py)."
    return msg


def _build_products(settings) -> ProductSource | None:
    """Admin client, or None when Shopify credentials are missing (suggestions off)."""
    try:
        return ShopifyAdminClient(
            settings.shop_domain,
            settings.admin_access_token or "",
            api_version=settings.admin_api_version,
            connect_timeout=settings.http_connect_timeout,
            read_timeout=settings.http_read_timeout,
        )
    except RuntimeError as e:
        logger.warning("Suggestions disabled: %s", e)
        return None


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    Raises RuntimeError if the task store is not configured.
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    task_store = TaskStore(
        settings.store_url,
        settings.store_key or "",
        table=settings.store_table,
        connect_timeout=settings.http_connect_timeout,
        read_timeout=settings.http_read_timeout,
    )
    products = _build_products(settings)

    return AppState(
        settings=settings,
        task_store=task_store,
        products=products,
        panel=TaskPanel(task_store, products, success_seconds=settings.success_seconds),
    )


def close_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.task_store.close()
    except Exception:
        logger.debug("Task store close failed.", exc_info=True)

    if state.products is not None:
        try:
            state.products.close()
        except Exception:
            logger.debug("Admin client close failed.", exc_info=True)
