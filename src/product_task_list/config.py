# src/product_task_list/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Credentials are checked only when a client is actually built.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "PTL"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Hosted table store (Supabase / PostgREST) ----
    store_url: str
    store_key: Optional[str]
    store_table: str

    # ---- Shopify Admin API ----
    shop_domain: str
    admin_access_token: Optional[str]
    admin_api_version: str

    # ---- HTTP ----
    http_connect_timeout: float
    http_read_timeout: float

    # ---- Panel ----
    success_seconds: float
    default_product_id: Optional[str]

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "product-task-list")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/product-task-list"))

        store_url = (_first_env(_k("STORE_URL"), "SUPABASE_URL", default="") or "").strip().rstrip("/")
        store_key = _first_env(_k("STORE_KEY"), "SUPABASE_KEY", default=None)
        store_table = _env(_k("STORE_TABLE"), "product_tasks").strip() or "product_tasks"

        shop_domain = (_first_env(_k("SHOP_DOMAIN"), "SHOPIFY_SHOP_DOMAIN", default="") or "").strip()
        admin_access_token = _first_env(_k("ADMIN_ACCESS_TOKEN"), "SHOPIFY_ACCESS_TOKEN", default=None)
        admin_api_version = (
            _first_env(_k("ADMIN_API_VERSION"), "SHOPIFY_API_VERSION", default="2025-07") or "2025-07"
        ).strip()

        http_connect_timeout = _env_float(_k("HTTP_CONNECT_TIMEOUT_SECONDS"), 5.0)
        http_read_timeout = _env_float(_k("HTTP_READ_TIMEOUT_SECONDS"), 15.0)

        success_seconds = _env_float(_k("SUCCESS_SECONDS"), 3.0)
        default_product_id = _first_env(_k("PRODUCT_ID"), default=None)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_url=store_url,
            store_key=store_key,
            store_table=store_table,
            shop_domain=shop_domain,
            admin_access_token=admin_access_token,
            admin_api_version=admin_api_version,
            http_connect_timeout=http_connect_timeout,
            http_read_timeout=http_read_timeout,
            success_seconds=success_seconds,
            default_product_id=default_product_id,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env for secrets; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "LOG_LEVEL"):
        object.__setattr__(SETTINGS, "log_level", str(_config_local.LOG_LEVEL))  # type: ignore[misc]
    if hasattr(_config_local, "DEFAULT_PRODUCT_ID"):
        object.__setattr__(SETTINGS, "default_product_id", str(_config_local.DEFAULT_PRODUCT_ID))  # type: ignore[misc]
except ImportError:
    pass


def get_settings() -> Settings:
    return SETTINGS
