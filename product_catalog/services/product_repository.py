"""Product repository: CRUD over the document store with fixture fallback.

Listing is a two-tier lookup. The primary document store is queried
first; if it has no matches, the same filter and page window are applied
to the static fixture file instead.
"""

import logging
from typing import Any, List, Mapping, Optional

from product_catalog.clients import CosmosDBClient
from product_catalog.config import AppConfig, get_config
from product_catalog.config.configuration import DEFAULT_PAGE_LIMIT
from product_catalog.models import DeleteResult, Product, ProductChanges
from product_catalog.stores import (
    CosmosProductStore,
    FixtureProductSource,
    ProductQuery,
    ProductStore,
    SqliteProductStore,
)

logger = logging.getLogger(__name__)


class ProductRepository:
    """Service for creating, reading, editing and deleting products."""

    def __init__(
        self,
        store: ProductStore,
        fixture: Optional[FixtureProductSource] = None,
        default_limit: int = DEFAULT_PAGE_LIMIT,
    ):
        """Initialize the repository.

        Args:
            store: Primary document store holding live products.
            fixture: Optional static source used when the store has no matches.
            default_limit: Page size used when list() is called without a limit.
        """
        self._store = store
        self._fixture = fixture
        self._default_limit = default_limit

    async def connect(self) -> None:
        await self._store.connect()

    async def close(self) -> None:
        await self._store.close()

    async def __aenter__(self) -> "ProductRepository":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    async def get(self, product_id: str) -> Optional[Product]:
        """Get a single product, or None if it does not exist."""
        product = await self._store.find_by_id(product_id)
        logger.debug(f"get({product_id}) found={product is not None}")
        return product

    async def create(self, fields: Mapping[str, Any]) -> Product:
        """Create a new product.

        An id is generated when the fields do not carry one.

        Raises:
            pydantic.ValidationError: If a required field is missing or malformed.
            Store-level duplicate key error if the id is already taken.
        """
        product = Product.model_validate(dict(fields))
        saved = await self._store.insert(product)
        logger.info(f"Created product {saved.id}")
        return saved

    async def edit(self, product_id: str, changes: Mapping[str, Any]) -> Optional[Product]:
        """Overwrite top-level fields of an existing product.

        Nested sub-objects are replaced wholesale, not merged.

        Returns:
            The updated product, or None if no product has this id.

        Raises:
            pydantic.ValidationError: If a change names an unknown field or
                leaves the product invalid.
        """
        # Validate before touching the store
        update = ProductChanges.model_validate(dict(changes))

        product = await self.get(product_id)
        if product is None:
            return None

        updated = update.apply_to(product)
        saved = await self._store.save(updated)
        logger.info(f"Edited product {product_id}: {sorted(update.model_fields_set)}")
        return saved

    async def destroy(self, product_id: str) -> DeleteResult:
        """Delete a product. Deleting a missing product is not an error."""
        deleted_count = await self._store.delete_one(product_id)
        logger.info(f"Deleted {deleted_count} product(s) with id {product_id}")
        return DeleteResult(deleted_count=deleted_count)

    async def list(
        self,
        offset: int = 0,
        limit: Optional[int] = None,
        tag: Optional[str] = None,
    ) -> List[Product]:
        """List products, optionally filtered by tag title.

        Store results are sorted by id ascending. When the store has no
        matches, fixture products are returned in file order instead.
        The fixture file is read on every call, so a missing or malformed
        fixture fails the call even when the store has results.
        """
        if limit is None:
            limit = self._default_limit
        query = ProductQuery(tag=tag, skip=offset, limit=limit)

        fixture_products: List[Product] = []
        if self._fixture is not None:
            fixture_products = await self._fixture.list(tag=tag, offset=offset, limit=limit)

        products = await self._store.find(query)
        if products:
            return products

        if self._fixture is not None:
            logger.info(
                f"Store returned no products for tag={tag!r} offset={offset}, "
                f"falling back to {len(fixture_products)} fixture products"
            )
        return fixture_products


def create_product_store(config: AppConfig) -> ProductStore:
    """Create the product store selected by configuration.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    backend = config.product_store.backend

    if backend == "sqlite":
        return SqliteProductStore(config.product_store.sqlite_path)
    elif backend == "cosmosdb":
        cosmos = config.cosmosdb
        return CosmosProductStore(
            CosmosDBClient(
                endpoint=cosmos.endpoint,
                key=cosmos.key,
                database_name=cosmos.database_name,
                container_name=cosmos.container_name,
            )
        )
    else:
        raise ValueError(f"Unknown product_store backend: {backend}")


def create_product_repository(config: Optional[AppConfig] = None) -> ProductRepository:
    """Build a ProductRepository from configuration.

    The returned repository still has to be connected, either with
    connect() or by using it as an async context manager.
    """
    config = config or get_config()

    fixture = FixtureProductSource(config.fixture.path) if config.fixture.path else None
    return ProductRepository(
        store=create_product_store(config),
        fixture=fixture,
        default_limit=config.pagination.default_limit,
    )
