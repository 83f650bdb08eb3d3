"""Configuration module for the product catalog.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (SQLite document store, local development)
- APP_ENV=test → config_test.yaml (CosmosDB backend, production-like testing)
- Default      → config.yaml

Cosmos DB credentials are loaded from the .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

STORE_BACKENDS = ("sqlite", "cosmosdb")
DEFAULT_PAGE_LIMIT = 25


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from product_catalog/config/ up to project root
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


def _resolve_path(path: str) -> str:
    """Resolve a path relative to the project root."""
    if path == ":memory:":
        return path
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = _get_project_root() / candidate
    return str(candidate)


@dataclass(frozen=True)
class ProductStoreConfig:
    """Product store configuration with backend toggle."""
    backend: str  # "sqlite" or "cosmosdb"
    sqlite_path: str


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for product documents."""
    endpoint: str
    key: str
    database_name: str
    container_name: str


@dataclass(frozen=True)
class FixtureConfig:
    """Static fixture file used when the store has no matches."""
    path: Optional[str]  # None disables the fallback


@dataclass(frozen=True)
class PaginationConfig:
    """Pagination defaults for list operations."""
    default_limit: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    product_store: ProductStoreConfig
    cosmosdb: Optional[CosmosDBConfig]  # Only required when product_store.backend == "cosmosdb"
    fixture: FixtureConfig
    pagination: PaginationConfig
    logging: LoggingConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for non-sensitive settings and .env for
    Cosmos DB credentials. Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build product store config
    store_section = yaml_config.get("product_store", {})
    store_backend = store_section.get("backend", "sqlite")

    if store_backend not in STORE_BACKENDS:
        raise ConfigurationError(
            f"Unknown product_store backend '{store_backend}'. "
            f"Expected one of: {', '.join(STORE_BACKENDS)}."
        )

    product_store_config = ProductStoreConfig(
        backend=store_backend,
        sqlite_path=_resolve_path(store_section.get("sqlite_path", "products.db")),
    )

    # Build CosmosDB config (only if backend is cosmosdb)
    cosmosdb_config: Optional[CosmosDBConfig] = None
    if store_backend == "cosmosdb":
        cosmosdb_section = yaml_config.get("cosmosdb", {})
        cosmosdb_config = CosmosDBConfig(
            endpoint=_get_required_env("COSMOSDB_ENDPOINT"),
            key=_get_required_env("COSMOSDB_KEY"),
            database_name=cosmosdb_section.get("database_name", "catalog"),
            container_name=cosmosdb_section.get("container_name", "products"),
        )

    # Build fixture config
    fixture_section = yaml_config.get("fixture", {})
    fixture_path = fixture_section.get("path")

    fixture_config = FixtureConfig(
        path=_resolve_path(fixture_path) if fixture_path else None,
    )

    # Build pagination config
    pagination_section = yaml_config.get("pagination", {})
    default_limit = pagination_section.get("default_limit", DEFAULT_PAGE_LIMIT)

    if not isinstance(default_limit, int) or default_limit <= 0:
        raise ConfigurationError(
            f"pagination.default_limit must be a positive integer, got {default_limit!r}"
        )

    pagination_config = PaginationConfig(default_limit=default_limit)

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    return AppConfig(
        product_store=product_store_config,
        cosmosdb=cosmosdb_config,
        fixture=fixture_config,
        pagination=pagination_config,
        logging=logging_config,
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
