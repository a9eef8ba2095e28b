"""Catalog services."""

from coffeehub.services.errors import (
    BadRequestError,
    CatalogError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from coffeehub.services.product_service import ProductService
from coffeehub.services.stats_service import StatsService
from coffeehub.services.validation import ValidationResult, apply_defaults, sanitize, validate

__all__ = [
    "BadRequestError",
    "CatalogError",
    "InternalError",
    "NotFoundError",
    "ProductService",
    "StatsService",
    "ValidationError",
    "ValidationResult",
    "apply_defaults",
    "sanitize",
    "validate",
]
