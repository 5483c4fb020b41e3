# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from product_task_list.core.panel import TaskPanel
from product_task_list.core.state import AppState
from product_task_list.shopify.admin_client import ProductDetails
from product_task_list.tasks.task_models import TaskRow

from .fakes import FakeClock, FakeProductSource, FakeTaskRepo

PRODUCT = "gid://shopify/Product/1"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="product-task-list",
        log_level="INFO",
        data_dir=tmp_path / "data",
        store_url="https://example.supabase.co",
        store_key="anon-key",
        store_table="product_tasks",
        shop_domain="",
        admin_access_token=None,
        admin_api_version="2025-07",
        http_connect_timeout=1.0,
        http_read_timeout=1.0,
        success_seconds=3.0,
        default_product_id=None,
    )


@pytest.fixture()
def bare_product() -> ProductDetails:
    """A product that triggers every suggestion."""
    return ProductDetails(title="Gor", description_html="", image_count=0)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def repo() -> FakeTaskRepo:
    return FakeTaskRepo(
        [
            TaskRow(2, PRODUCT, "Subir fotos de detalle", False, "2026-10-17T10:00:00+00:00"),
            TaskRow(1, PRODUCT, "Revisar precio", True, "2026-10-16T10:00:00+00:00"),
            TaskRow(9, "gid://shopify/Product/2", "Otro producto", False, "2026-10-15T10:00:00+00:00"),
        ]
    )


@pytest.fixture()
def products(bare_product: ProductDetails) -> FakeProductSource:
    return FakeProductSource(bare_product)


@pytest.fixture()
def panel(repo: FakeTaskRepo, products: FakeProductSource, clock: FakeClock) -> TaskPanel:
    return TaskPanel(repo, products, success_seconds=3.0, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, repo: FakeTaskRepo, products: FakeProductSource, panel: TaskPanel) -> AppState:
    """AppState wired with in-memory fakes instead of the HTTP clients."""
    return AppState(settings=settings, task_store=repo, products=products, panel=panel)
