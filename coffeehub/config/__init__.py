"""Configuration module."""

from coffeehub.config.configuration import (
    AppConfig,
    ConfigurationError,
    CosmosDBConfig,
    DatabaseConfig,
    LoggingConfig,
    ServerConfig,
    get_config,
    get_environment,
    load_config,
    reset_config,
)

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "CosmosDBConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_config",
    "get_environment",
    "load_config",
    "reset_config",
]
