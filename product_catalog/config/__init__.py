"""Configuration module."""

from product_catalog.config.configuration import (
    AppConfig,
    ConfigurationError,
    CosmosDBConfig,
    FixtureConfig,
    LoggingConfig,
    PaginationConfig,
    ProductStoreConfig,
    get_config,
    get_environment,
    load_config,
    reset_config,
)

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "CosmosDBConfig",
    "FixtureConfig",
    "LoggingConfig",
    "PaginationConfig",
    "ProductStoreConfig",
    "get_config",
    "get_environment",
    "load_config",
    "reset_config",
]
