"""Cosmos DB backed product store."""

import logging
from typing import Any, Optional

from product_catalog.clients import CosmosDBClient
from product_catalog.models import Product
from product_catalog.stores.base import ProductQuery, ProductStore

logger = logging.getLogger(__name__)

# System properties Cosmos DB adds to every document
SYSTEM_PROPERTIES = ("_rid", "_self", "_etag", "_attachments", "_ts")

TAG_FILTER_SQL = "EXISTS(SELECT VALUE t FROM t IN c.tags WHERE t.title = @tag)"


def build_find_query(query: ProductQuery) -> tuple[str, list[dict[str, Any]]]:
    """Build the parameterized SQL for a product lookup."""
    sql = "SELECT * FROM c"
    parameters: list[dict[str, Any]] = []

    if query.tag:
        sql += f" WHERE {TAG_FILTER_SQL}"
        parameters.append({"name": "@tag", "value": query.tag})

    sql += f" ORDER BY c.{query.sort} ASC OFFSET @skip LIMIT @limit"
    parameters.append({"name": "@skip", "value": query.skip})
    parameters.append({"name": "@limit", "value": query.limit})

    return sql, parameters


def _to_product(item: dict[str, Any]) -> Product:
    document = {k: v for k, v in item.items() if k not in SYSTEM_PROPERTIES}
    return Product.model_validate(document)


class CosmosProductStore(ProductStore):
    """Product store on an Azure Cosmos DB container partitioned on /id."""

    def __init__(self, client: CosmosDBClient):
        self._client = client

    async def connect(self) -> None:
        await self._client.connect()

    async def close(self) -> None:
        await self._client.close()

    async def find(self, query: ProductQuery) -> list[Product]:
        sql, parameters = build_find_query(query)
        items = await self._client.query_items(query=sql, parameters=parameters)
        logger.debug(f"Cosmos DB query returned {len(items)} products for {query}")
        return [_to_product(item) for item in items]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        item = await self._client.read_item(product_id)
        return _to_product(item) if item is not None else None

    async def insert(self, product: Product) -> Product:
        item = await self._client.create_item(product.to_document())
        return _to_product(item)

    async def save(self, product: Product) -> Product:
        item = await self._client.upsert_item(product.to_document())
        return _to_product(item)

    async def delete_one(self, product_id: str) -> int:
        deleted = await self._client.delete_item(product_id)
        return 1 if deleted else 0
