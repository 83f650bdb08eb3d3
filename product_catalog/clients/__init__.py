"""Client modules for external services."""

from product_catalog.clients.sqlite_client import SqliteClient
from product_catalog.clients.cosmosdb_client import CosmosDBClient

__all__ = [
    "SqliteClient",
    "CosmosDBClient",
]
