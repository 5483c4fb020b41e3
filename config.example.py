# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "PTL_APP_NAME": "App display name (default: product-task-list).",
    "PTL_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "PTL_DATA_DIR": "Local data directory for logs (default: .local/product-task-list).",
    # Hosted table store
    "PTL_STORE_URL": "Supabase project URL, e.g. https://<ref>.supabase.co (fallback: SUPABASE_URL).",
    "PTL_STORE_KEY": "Supabase API key sent as apikey + bearer token (fallback: SUPABASE_KEY).",
    "PTL_STORE_TABLE": "Table holding the rows (default: product_tasks).",
    # Shopify Admin API (suggestions are disabled without these)
    "PTL_SHOP_DOMAIN": "Shop domain, e.g. your-store.myshopify.com (fallback: SHOPIFY_SHOP_DOMAIN).",
    "PTL_ADMIN_ACCESS_TOKEN": "Admin API access token (fallback: SHOPIFY_ACCESS_TOKEN).",
    "PTL_ADMIN_API_VERSION": "Admin API version (default: 2025-07; fallback: SHOPIFY_API_VERSION).",
    # HTTP
    "PTL_HTTP_CONNECT_TIMEOUT_SECONDS": "Connect timeout for both backends (default: 5).",
    "PTL_HTTP_READ_TIMEOUT_SECONDS": "Read timeout for both backends (default: 15).",
    # Panel
    "PTL_SUCCESS_SECONDS": "How long success banners stay visible (default: 3).",
    "PTL_PRODUCT_ID": "Product to open on start when --product is not given.",
}
