"""Presentation client for the CoffeeHub API."""

from coffeehub.client.catalog_client import (
    DEFAULT_BACKEND_URL,
    CatalogClient,
    CatalogClientError,
)
from coffeehub.client.render import print_view, render_product_card, render_products, render_stats
from coffeehub.client.session import CatalogSession, CatalogView, MutationResult

__all__ = [
    "DEFAULT_BACKEND_URL",
    "CatalogClient",
    "CatalogClientError",
    "CatalogSession",
    "CatalogView",
    "MutationResult",
    "print_view",
    "render_product_card",
    "render_products",
    "render_stats",
]
