"""In-memory product store, used for local development and tests."""

import itertools
from dataclasses import replace
from typing import Any, Optional

from coffeehub.models import Product
from coffeehub.statistics import CatalogStats, summarize_products
from coffeehub.storage.base import ProductStore, parse_integer_id


class MemoryProductStore(ProductStore):
    """Keeps products in a dict keyed by auto-incremented integer ids."""

    backend_name = "memory"

    def __init__(self):
        self._products: dict[int, Product] = {}
        self._ids = itertools.count(1)

    def parse_id(self, raw_id: Any) -> int:
        return parse_integer_id(raw_id)

    async def insert(self, fields: dict[str, Any]) -> Product:
        product = Product(id=next(self._ids), **fields)
        self._products[product.id] = product
        return product

    async def find_all(self) -> list[Product]:
        return list(self._products.values())

    async def find_by_id(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    async def update(self, product_id: int, changes: dict[str, Any]) -> Optional[Product]:
        existing = self._products.get(product_id)
        if existing is None:
            return None
        updated = replace(existing, **changes)
        self._products[product_id] = updated
        return updated

    async def delete(self, product_id: int) -> bool:
        return self._products.pop(product_id, None) is not None

    async def aggregate(self) -> CatalogStats:
        return summarize_products(self._products.values())

    async def close(self) -> None:
        self._products.clear()
