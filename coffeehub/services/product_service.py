"""Product service: validation plus storage calls for each CRUD operation."""

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Mapping, TypeVar

from coffeehub.models import Product, ProductId
from coffeehub.services.errors import (
    BadRequestError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from coffeehub.services.validation import apply_defaults, sanitize, validate
from coffeehub.storage import InvalidIdentifierError, ProductStore, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductService:
    """CRUD operations over the catalog.

    Validation failures are raised before any storage call. Storage
    failures are logged here and re-raised as ``InternalError`` with a
    generic message.
    """

    def __init__(self, store: ProductStore, clock=_utcnow):
        """Initialize the service.

        Args:
            store: Connected storage backend.
            clock: Callable returning the current UTC time.
        """
        self._store = store
        self._clock = clock

    def _parse_id(self, raw_id: Any) -> ProductId:
        try:
            return self._store.parse_id(raw_id)
        except InvalidIdentifierError:
            raise BadRequestError(f"Invalid product id: {raw_id}")

    @staticmethod
    def _require_object(payload: Any) -> Mapping[str, Any]:
        if not isinstance(payload, Mapping):
            raise BadRequestError("Request body must be a JSON object")
        return payload

    async def _call_store(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except StorageError:
            logger.exception(f"Storage failure during {operation}")
            raise InternalError(f"Could not {operation}")

    async def list_products(self) -> list[Product]:
        return await self._call_store("list products", self._store.find_all())

    async def get_product(self, raw_id: Any) -> Product:
        product_id = self._parse_id(raw_id)
        product = await self._call_store("read product", self._store.find_by_id(product_id))
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    async def create_product(self, payload: Any) -> Product:
        fields = sanitize(self._require_object(payload))
        result = validate(fields)
        if not result.valid:
            logger.info(f"Rejected new product: {result.errors}")
            raise ValidationError(result.errors)

        now = self._clock()
        record = apply_defaults(fields)
        record["created_at"] = now
        record["updated_at"] = now

        product = await self._call_store("create product", self._store.insert(record))
        logger.info(f"Created product {product.id}")
        return product

    async def update_product(self, raw_id: Any, payload: Any) -> Product:
        product_id = self._parse_id(raw_id)
        changes = sanitize(self._require_object(payload), partial=True)
        result = validate(changes, is_update=True)
        if not result.valid:
            logger.info(f"Rejected update of product {product_id}: {result.errors}")
            raise ValidationError(result.errors)

        changes["updated_at"] = self._clock()
        product = await self._call_store(
            "update product", self._store.update(product_id, changes)
        )
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")

        logger.info(f"Updated product {product_id} ({', '.join(sorted(changes))})")
        return product

    async def delete_product(self, raw_id: Any) -> ProductId:
        product_id = self._parse_id(raw_id)
        deleted = await self._call_store("delete product", self._store.delete(product_id))
        if not deleted:
            raise NotFoundError(f"Product {product_id} not found")

        logger.info(f"Deleted product {product_id}")
        return product_id
