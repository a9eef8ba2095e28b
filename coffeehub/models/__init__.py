"""Data models module."""

from coffeehub.models.product import (
    DEFAULT_DESCRIPTION,
    DEFAULT_ORIGIN,
    DEFAULT_RATING,
    DEFAULT_ROAST,
    DEFAULT_TYPE,
    Product,
    ProductId,
)

__all__ = [
    "DEFAULT_DESCRIPTION",
    "DEFAULT_ORIGIN",
    "DEFAULT_RATING",
    "DEFAULT_ROAST",
    "DEFAULT_TYPE",
    "Product",
    "ProductId",
]
