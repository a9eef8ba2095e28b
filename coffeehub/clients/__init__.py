"""Client modules for database backends."""

from coffeehub.clients.cosmosdb_client import CosmosDBClient
from coffeehub.clients.sqlite_client import SqliteClient, WriteResult

__all__ = [
    "CosmosDBClient",
    "SqliteClient",
    "WriteResult",
]
