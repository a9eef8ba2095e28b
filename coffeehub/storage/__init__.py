"""Storage port and backend implementations."""

from coffeehub.storage.base import (
    InvalidIdentifierError,
    ProductStore,
    StorageError,
    parse_integer_id,
)
from coffeehub.storage.cosmosdb_store import CosmosDBProductStore
from coffeehub.storage.factory import create_store
from coffeehub.storage.memory_store import MemoryProductStore
from coffeehub.storage.sqlite_store import SqliteProductStore

__all__ = [
    "CosmosDBProductStore",
    "InvalidIdentifierError",
    "MemoryProductStore",
    "ProductStore",
    "SqliteProductStore",
    "StorageError",
    "create_store",
    "parse_integer_id",
]
