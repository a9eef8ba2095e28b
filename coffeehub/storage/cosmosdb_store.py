"""Document product store backed by Azure Cosmos DB."""

import logging
import uuid
from datetime import datetime
from typing import Any, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from coffeehub.clients import CosmosDBClient
from coffeehub.models import (
    DEFAULT_DESCRIPTION,
    DEFAULT_ORIGIN,
    DEFAULT_RATING,
    DEFAULT_ROAST,
    DEFAULT_TYPE,
    Product,
)
from coffeehub.statistics import CatalogStats, summarize_products
from coffeehub.storage.base import InvalidIdentifierError, ProductStore, StorageError

logger = logging.getLogger(__name__)

SELECT_ALL_QUERY = "SELECT * FROM c"
SELECT_BY_ID_QUERY = "SELECT * FROM c WHERE c.id = @id"

# Product attribute -> document field
_DOCUMENT_FIELDS = {
    "name": "name",
    "origin": "origin",
    "type": "type",
    "price": "price",
    "roast": "roast",
    "rating": "rating",
    "description": "description",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def _to_document_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _document_to_product(document: dict[str, Any]) -> Product:
    """Map a stored document (system fields included) to a Product."""
    rating = document.get("rating")
    return Product(
        id=document["id"],
        name=document.get("name", ""),
        origin=document.get("origin") or DEFAULT_ORIGIN,
        type=document.get("type") or DEFAULT_TYPE,
        price=float(document.get("price", 0)),
        roast=document.get("roast") or DEFAULT_ROAST,
        rating=float(rating) if rating is not None else DEFAULT_RATING,
        description=document.get("description") or DEFAULT_DESCRIPTION,
        created_at=_parse_timestamp(document.get("createdAt")),
        updated_at=_parse_timestamp(document.get("updatedAt")),
    )


def _strip_system_fields(document: dict[str, Any]) -> dict[str, Any]:
    # Cosmos adds _rid, _self, _etag, _attachments and _ts to every document
    return {key: value for key, value in document.items() if not key.startswith("_")}


class CosmosDBProductStore(ProductStore):
    """Stores each product as one document identified by a UUID string."""

    backend_name = "cosmosdb"

    def __init__(self, client: CosmosDBClient, partition_key_path: str = "/id"):
        self._client = client
        self._partition_field = partition_key_path.lstrip("/")

    async def connect(self) -> None:
        try:
            await self._client.connect()
        except AzureError as e:
            raise StorageError("Could not connect to Cosmos DB") from e
        logger.info("Connected to Cosmos DB product container")

    async def close(self) -> None:
        await self._client.close()

    def parse_id(self, raw_id: Any) -> str:
        try:
            return str(uuid.UUID(str(raw_id).strip()))
        except ValueError:
            raise InvalidIdentifierError(raw_id)

    async def _find_document(self, product_id: str) -> Optional[dict[str, Any]]:
        documents = await self._client.query_items(
            query=SELECT_BY_ID_QUERY,
            parameters=[{"name": "@id", "value": product_id}],
        )
        return documents[0] if documents else None

    async def insert(self, fields: dict[str, Any]) -> Product:
        document = {"id": str(uuid.uuid4())}
        for attribute, key in _DOCUMENT_FIELDS.items():
            if attribute in fields:
                document[key] = _to_document_value(fields[attribute])
        try:
            created = await self._client.create_item(document)
        except AzureError as e:
            raise StorageError("Failed to insert product document") from e
        return _document_to_product(created)

    async def find_all(self) -> list[Product]:
        try:
            documents = await self._client.query_items(query=SELECT_ALL_QUERY)
        except AzureError as e:
            raise StorageError("Failed to list product documents") from e
        return [_document_to_product(document) for document in documents]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        try:
            document = await self._find_document(product_id)
        except AzureError as e:
            raise StorageError(f"Failed to read product document {product_id}") from e
        return _document_to_product(document) if document else None

    async def update(self, product_id: str, changes: dict[str, Any]) -> Optional[Product]:
        try:
            document = await self._find_document(product_id)
            if document is None:
                return None

            merged = _strip_system_fields(document)
            for attribute, key in _DOCUMENT_FIELDS.items():
                if attribute in changes:
                    merged[key] = _to_document_value(changes[attribute])

            replaced = await self._client.replace_item(product_id, merged)
        except CosmosResourceNotFoundError:
            # Deleted between the read and the replace
            return None
        except AzureError as e:
            raise StorageError(f"Failed to update product document {product_id}") from e
        return _document_to_product(replaced)

    async def delete(self, product_id: str) -> bool:
        try:
            document = await self._find_document(product_id)
            if document is None:
                return False
            await self._client.delete_item(
                product_id,
                partition_key=document.get(self._partition_field, product_id),
            )
        except CosmosResourceNotFoundError:
            return False
        except AzureError as e:
            raise StorageError(f"Failed to delete product document {product_id}") from e
        return True

    async def aggregate(self) -> CatalogStats:
        return summarize_products(await self.find_all())
