"""Product data sources: document stores and the static fixture."""

from product_catalog.stores.base import ProductQuery, ProductStore
from product_catalog.stores.cosmos_store import CosmosProductStore
from product_catalog.stores.fixture_source import FixtureProductSource
from product_catalog.stores.sqlite_store import SqliteProductStore

__all__ = [
    "CosmosProductStore",
    "FixtureProductSource",
    "ProductQuery",
    "ProductStore",
    "SqliteProductStore",
]
