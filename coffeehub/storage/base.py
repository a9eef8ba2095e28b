"""Storage port implemented by every catalog backend."""

import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from coffeehub.models import Product, ProductId
from coffeehub.statistics import CatalogStats

_INTEGER_ID = re.compile(r"[0-9]+")
MAX_INTEGER_ID = 2**63 - 1  # SQLite INTEGER PRIMARY KEY range

# Columns / document fields a store persists besides the id
PRODUCT_FIELDS = (
    "name",
    "origin",
    "type",
    "price",
    "roast",
    "rating",
    "description",
    "created_at",
    "updated_at",
)


class StorageError(Exception):
    """Raised when the backing store fails (connectivity, driver errors)."""
    pass


class InvalidIdentifierError(ValueError):
    """Raised when a raw identifier is not well-formed for the backend."""

    def __init__(self, raw_id: Any):
        super().__init__(f"Invalid product id: {raw_id!r}")
        self.raw_id = raw_id


class ProductStore(ABC):
    """Boundary to the store holding products.

    Implementations own their connection: it is opened by ``connect`` once
    at startup and released by ``close`` at shutdown.
    """

    backend_name: str = "abstract"

    async def connect(self) -> None:
        """Open the underlying connection. No-op by default."""

    async def close(self) -> None:
        """Release the underlying connection. No-op by default."""

    async def __aenter__(self) -> "ProductStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    @abstractmethod
    def parse_id(self, raw_id: Any) -> ProductId:
        """Convert a raw path identifier into the backend's id type.

        Raises:
            InvalidIdentifierError: If the identifier is malformed.
        """

    @abstractmethod
    async def insert(self, fields: dict[str, Any]) -> Product:
        """Persist a new product and return it with its assigned id."""

    @abstractmethod
    async def find_all(self) -> list[Product]:
        """Return every stored product."""

    @abstractmethod
    async def find_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Return the product with the given id, or None."""

    @abstractmethod
    async def update(self, product_id: ProductId, changes: dict[str, Any]) -> Optional[Product]:
        """Merge ``changes`` into an existing product.

        Returns:
            The updated product, or None if no product has that id.
        """

    @abstractmethod
    async def delete(self, product_id: ProductId) -> bool:
        """Remove a product. Returns False if it did not exist."""

    @abstractmethod
    async def aggregate(self) -> CatalogStats:
        """Compute catalog statistics over the current contents."""


def parse_integer_id(raw_id: Any) -> int:
    """Parse a positive integer id as used by auto-increment keys."""
    if isinstance(raw_id, bool):
        raise InvalidIdentifierError(raw_id)
    if isinstance(raw_id, int):
        value = raw_id
    else:
        text = str(raw_id).strip()
        if not _INTEGER_ID.fullmatch(text):
            raise InvalidIdentifierError(raw_id)
        value = int(text)
    if value <= 0 or value > MAX_INTEGER_ID:
        raise InvalidIdentifierError(raw_id)
    return value
