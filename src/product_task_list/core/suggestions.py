# src/product_task_list/core/suggestions.py

from __future__ import annotations

from collections.abc import Iterable

from ..shopify.admin_client import ProductDetails

SUGGEST_IMAGE = "Agregar imagen destacada"
SUGGEST_DESCRIPTION = "Completar descripción del producto"
SUGGEST_TITLE = "Revisar título del producto"

MIN_DESCRIPTION_LEN = 50
MIN_TITLE_LEN = 5


def evaluate_suggestions(product: ProductDetails, existing_texts: Iterable[str]) -> list[str]:
    """
    Suggested checklist items for a product, in display order.

    A template is skipped when a task with exactly that text already exists.
    Description length is measured on the raw HTML.
    """
    existing = set(existing_texts)
    out: list[str] = []

    if product.image_count == 0 and SUGGEST_IMAGE not in existing:
        out.append(SUGGEST_IMAGE)

    desc = product.description_html or ""
    if len(desc) < MIN_DESCRIPTION_LEN and SUGGEST_DESCRIPTION not in existing:
        out.append(SUGGEST_DESCRIPTION)

    title = product.title or ""
    if len(title) < MIN_TITLE_LEN and SUGGEST_TITLE not in existing:
        out.append(SUGGEST_TITLE)

    return out
