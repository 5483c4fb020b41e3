# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for secrets. This file should contain only safe overrides.
"""

# Example: more verbose console logs
# LOG_LEVEL = "DEBUG"

# Example: always open the same product
# DEFAULT_PRODUCT_ID = "gid://shopify/Product/1234567890"
