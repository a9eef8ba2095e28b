"""Build the configured product store."""

from coffeehub.clients import CosmosDBClient
from coffeehub.config import AppConfig, ConfigurationError
from coffeehub.storage.base import ProductStore
from coffeehub.storage.cosmosdb_store import CosmosDBProductStore
from coffeehub.storage.memory_store import MemoryProductStore
from coffeehub.storage.sqlite_store import SqliteProductStore


def create_store(config: AppConfig) -> ProductStore:
    """Create an unconnected store for ``config.database.backend``.

    Raises:
        ConfigurationError: If the backend is unknown or lacks its settings.
    """
    backend = config.database.backend

    if backend == "sqlite":
        return SqliteProductStore(config.database.path)
    if backend == "memory":
        return MemoryProductStore()
    if backend == "cosmosdb":
        if config.cosmosdb is None:
            raise ConfigurationError("Cosmos DB backend selected but no cosmosdb configuration loaded")
        client = CosmosDBClient(
            endpoint=config.cosmosdb.endpoint,
            key=config.cosmosdb.key,
            database_name=config.cosmosdb.database_name,
            container_name=config.cosmosdb.container_name,
            partition_key_path=config.cosmosdb.partition_key_path,
        )
        return CosmosDBProductStore(client, partition_key_path=config.cosmosdb.partition_key_path)

    raise ConfigurationError(f"Unknown database backend '{backend}'")
