# src/product_task_list/shopify/admin_client.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..http_client import build_client, describe_http_error

logger = logging.getLogger(__name__)

PRODUCT_DETAILS_QUERY = """
query ProductDetails($id: ID!) {
  product(id: $id) {
    title
    descriptionHtml
    images(first: 1) {
      edges {
        node {
          url
        }
      }
    }
  }
}
"""


class AdminApiError(RuntimeError):
    """Shopify Admin GraphQL call failed (transport, HTTP status or GraphQL errors)."""


@dataclass(frozen=True, slots=True)
class ProductDetails:
    title: str | None
    description_html: str | None
    image_count: int

    @classmethod
    def from_graphql(cls, product: dict[str, Any]) -> ProductDetails:
        images = product.get("images") or {}
        edges = images.get("edges") or []
        return cls(
            title=product.get("title"),
            description_html=product.get("descriptionHtml"),
            image_count=len(edges),
        )


def normalize_shop_domain(val: str) -> str:
    v = (val or "").strip()
    if v.lower().startswith("https://"):
        v = v[8:]
    elif v.lower().startswith("http://"):
        v = v[7:]
    return v.strip().strip("/")


class ShopifyAdminClient:
    """Minimal Admin GraphQL client: reads the fields the suggestions need."""

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        *,
        api_version: str = "2025-07",
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        shop = normalize_shop_domain(shop_domain)
        if not shop:
            raise RuntimeError("Shop domain is not set. Set PTL_SHOP_DOMAIN (or SHOPIFY_SHOP_DOMAIN) in your .env.")
        if not access_token or not access_token.strip():
            raise RuntimeError(
                "Admin access token is not set. Set PTL_ADMIN_ACCESS_TOKEN (or SHOPIFY_ACCESS_TOKEN) in your .env."
            )

        self.shop = shop
        self.api_version = api_version
        self._client = build_client(
            base_url=f"https://{shop}/admin/api/{api_version}",
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Access-Token": access_token,
            },
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST a GraphQL document; return its `data` object."""
        try:
            resp = self._client.post("/graphql.json", json={"query": query, "variables": variables or {}})
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as e:
            _, detail = describe_http_error(e)
            raise AdminApiError(f"Admin API request failed ({detail})") from e
        except ValueError as e:
            raise AdminApiError("Admin API returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise AdminApiError("Admin API returned an unexpected payload")

        errors = payload.get("errors")
        if errors:
            if isinstance(errors, list):
                msg = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            else:
                msg = str(errors)
            raise AdminApiError(f"GraphQL errors: {msg}")

        data = payload.get("data")
        return data if isinstance(data, dict) else {}

    def fetch_product(self, product_id: str) -> ProductDetails | None:
        data = self.graphql(PRODUCT_DETAILS_QUERY, {"id": product_id})
        product = data.get("product")
        if not product:
            logger.info("Product not found id=%s", product_id)
            return None
        return ProductDetails.from_graphql(product)
