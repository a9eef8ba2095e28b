"""Relational product store backed by SQLite."""

import logging
import sqlite3
from datetime import datetime
from typing import Any, Optional

from coffeehub.clients import SqliteClient
from coffeehub.models import (
    DEFAULT_DESCRIPTION,
    DEFAULT_ORIGIN,
    DEFAULT_RATING,
    DEFAULT_ROAST,
    DEFAULT_TYPE,
    Product,
)
from coffeehub.statistics import NO_ORIGIN, CatalogStats, round_price
from coffeehub.storage.base import PRODUCT_FIELDS, ProductStore, StorageError, parse_integer_id

logger = logging.getLogger(__name__)

# SQL statements
CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    origin TEXT NOT NULL DEFAULT 'Unknown',
    type TEXT NOT NULL DEFAULT 'Unknown',
    price REAL NOT NULL CHECK (price >= 0 AND price <= 999999.99),
    roast TEXT NOT NULL DEFAULT 'Medium',
    rating REAL NOT NULL DEFAULT 0 CHECK (rating >= 0 AND rating <= 5),
    description TEXT NOT NULL DEFAULT 'No description',
    created_at TEXT,
    updated_at TEXT
)
"""

SELECT_COLUMNS = "id, " + ", ".join(PRODUCT_FIELDS)

TOTALS_SQL = "SELECT COUNT(*) AS total, AVG(price) AS avg_price FROM products"

POPULAR_ORIGIN_SQL = """
SELECT origin, COUNT(*) AS occurrences
FROM products
WHERE origin IS NOT NULL AND TRIM(origin) <> ''
GROUP BY origin
ORDER BY occurrences DESC
LIMIT 1
"""


def _to_db_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _row_to_product(row: sqlite3.Row) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        origin=row["origin"] or DEFAULT_ORIGIN,
        type=row["type"] or DEFAULT_TYPE,
        price=float(row["price"]),
        roast=row["roast"] or DEFAULT_ROAST,
        rating=float(row["rating"]) if row["rating"] is not None else DEFAULT_RATING,
        description=row["description"] or DEFAULT_DESCRIPTION,
        created_at=_parse_timestamp(row["created_at"]),
        updated_at=_parse_timestamp(row["updated_at"]),
    )


class SqliteProductStore(ProductStore):
    """Stores products in a single ``products`` table."""

    backend_name = "sqlite"

    def __init__(self, db_path: str = "coffeehub.db"):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file (or ``:memory:``).
        """
        self._db_path = db_path
        self._sqlite_client: Optional[SqliteClient] = None

    async def connect(self) -> None:
        """Open the database and create the products table if needed."""
        if self._sqlite_client is not None:
            return
        try:
            self._sqlite_client = SqliteClient(self._db_path)
            self._sqlite_client.execute_script(CREATE_TABLE_SQL)
        except sqlite3.Error as e:
            raise StorageError(f"Could not open SQLite database at {self._db_path}") from e
        logger.info(f"Connected to SQLite database: {self._db_path}")

    async def close(self) -> None:
        if self._sqlite_client is not None:
            self._sqlite_client.close()
            self._sqlite_client = None
            logger.debug("SQLite connection closed")

    @property
    def _client(self) -> SqliteClient:
        if self._sqlite_client is None:
            raise StorageError("SQLite store is not connected. Call connect() first.")
        return self._sqlite_client

    def parse_id(self, raw_id: Any) -> int:
        return parse_integer_id(raw_id)

    def _select_one(self, product_id: int) -> Optional[Product]:
        rows = self._client.execute_query(
            f"SELECT {SELECT_COLUMNS} FROM products WHERE id = ?",
            (product_id,),
        )
        return _row_to_product(rows[0]) if rows else None

    async def insert(self, fields: dict[str, Any]) -> Product:
        columns = [name for name in PRODUCT_FIELDS if name in fields]
        placeholders = ", ".join("?" for _ in columns)
        try:
            result = self._client.execute_write(
                f"INSERT INTO products ({', '.join(columns)}) VALUES ({placeholders})",
                tuple(_to_db_value(fields[name]) for name in columns),
            )
            product = self._select_one(result.lastrowid)
        except sqlite3.Error as e:
            raise StorageError("Failed to insert product") from e
        if product is None:
            raise StorageError(f"Inserted product {result.lastrowid} could not be read back")
        return product

    async def find_all(self) -> list[Product]:
        try:
            rows = self._client.execute_query(f"SELECT {SELECT_COLUMNS} FROM products")
        except sqlite3.Error as e:
            raise StorageError("Failed to list products") from e
        return [_row_to_product(row) for row in rows]

    async def find_by_id(self, product_id: int) -> Optional[Product]:
        try:
            return self._select_one(product_id)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read product {product_id}") from e

    async def update(self, product_id: int, changes: dict[str, Any]) -> Optional[Product]:
        columns = [name for name in PRODUCT_FIELDS if name in changes]
        if not columns:
            return await self.find_by_id(product_id)

        assignments = ", ".join(f"{name} = ?" for name in columns)
        params = tuple(_to_db_value(changes[name]) for name in columns) + (product_id,)
        try:
            result = self._client.execute_write(
                f"UPDATE products SET {assignments} WHERE id = ?",
                params,
            )
            if result.rowcount == 0:
                return None
            return self._select_one(product_id)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to update product {product_id}") from e

    async def delete(self, product_id: int) -> bool:
        try:
            result = self._client.execute_write(
                "DELETE FROM products WHERE id = ?",
                (product_id,),
            )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete product {product_id}") from e
        return result.rowcount > 0

    async def aggregate(self) -> CatalogStats:
        try:
            totals = self._client.execute_query(TOTALS_SQL)[0]
            popular = self._client.execute_query(POPULAR_ORIGIN_SQL)
        except sqlite3.Error as e:
            raise StorageError("Failed to compute catalog statistics") from e

        return CatalogStats(
            total=totals["total"],
            avg_price=round_price(totals["avg_price"]),
            popular_origin=popular[0]["origin"] if popular else NO_ORIGIN,
        )
