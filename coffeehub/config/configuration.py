"""Configuration module for CoffeeHub.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (in-memory store, local development)
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

Secrets (Cosmos DB credentials) are loaded from the .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv

SUPPORTED_BACKENDS = ("sqlite", "cosmosdb", "memory")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from coffeehub/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int
    cors_origins: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration with backend toggle."""
    backend: str  # "sqlite", "cosmosdb" or "memory"
    path: str


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for the document store backend."""
    endpoint: str
    key: str
    database_name: str
    container_name: str
    partition_key_path: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    server: ServerConfig
    database: DatabaseConfig
    logging: LoggingConfig
    cosmosdb: Optional[CosmosDBConfig]  # Only required when database.backend == "cosmosdb"


def _parse_port(raw) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid server port: {raw!r}")
    if not 0 < port < 65536:
        raise ConfigurationError(f"Server port out of range: {port}")
    return port


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from config.yaml for non-sensitive settings and .env for secrets.
    Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    # Build server config; PORT from the environment wins (hosting platforms set it)
    server_section = yaml_config.get("server", {})
    server_config = ServerConfig(
        host=server_section.get("host", "0.0.0.0"),
        port=_parse_port(_get_optional_env("PORT", server_section.get("port", 4000))),
        cors_origins=list(server_section.get("cors_origins", ["*"])),
    )

    # Build Database config
    db_section = yaml_config.get("database", {})
    backend = str(db_section.get("backend", "sqlite")).lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ConfigurationError(
            f"Unknown database backend '{backend}'. "
            f"Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
        )

    database_config = DatabaseConfig(
        backend=backend,
        path=db_section.get("path", "coffeehub.db"),
    )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=str(logging_section.get("level", "INFO")).upper(),
    )

    # Build CosmosDB config (only if backend is cosmosdb)
    cosmosdb_config: Optional[CosmosDBConfig] = None
    if backend == "cosmosdb":
        cosmosdb_section = yaml_config.get("cosmosdb", {})
        cosmosdb_config = CosmosDBConfig(
            endpoint=_get_required_env("COSMOSDB_ENDPOINT"),
            key=_get_required_env("COSMOSDB_KEY"),
            database_name=cosmosdb_section.get("database_name", "coffeehub"),
            container_name=cosmosdb_section.get("container_name", "coffees"),
            partition_key_path=cosmosdb_section.get("partition_key_path", "/id"),
        )

    return AppConfig(
        server=server_config,
        database=database_config,
        logging=logging_config,
        cosmosdb=cosmosdb_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
