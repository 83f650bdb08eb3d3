"""Unit tests for the Cosmos DB product store and client with mocks."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.cosmos.exceptions import (
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from product_catalog.clients import CosmosDBClient
from product_catalog.models import Product
from product_catalog.stores import CosmosProductStore, ProductQuery
from product_catalog.stores.cosmos_store import build_find_query

from conftest import build_product_fields


def _cosmos_item(**overrides) -> dict:
    """A stored document as Cosmos DB returns it, system properties included."""
    item = Product.model_validate(build_product_fields(**overrides)).to_document()
    item.update({"_rid": "abc==", "_self": "dbs/x/colls/y/docs/z", "_etag": '"0"', "_attachments": "attachments/", "_ts": 1700000000})
    return item


@pytest.fixture
def mock_client():
    client = MagicMock(spec=CosmosDBClient)
    client.connect = AsyncMock()
    client.close = AsyncMock()
    client.query_items = AsyncMock(return_value=[])
    client.read_item = AsyncMock(return_value=None)
    client.create_item = AsyncMock()
    client.upsert_item = AsyncMock()
    client.delete_item = AsyncMock(return_value=True)
    return client


@pytest.fixture
def connected_client():
    """A CosmosDBClient whose container is a mock."""
    client = CosmosDBClient(
        endpoint="https://localhost:8081",
        key="dGVzdA==",
        database_name="catalog",
        container_name="products",
    )
    client._container = MagicMock()
    return client


class TestBuildFindQuery:
    """Test SQL generation for product lookups."""

    def test_without_tag(self):
        sql, parameters = build_find_query(ProductQuery(skip=5, limit=10))

        assert sql == "SELECT * FROM c ORDER BY c.id ASC OFFSET @skip LIMIT @limit"
        assert parameters == [
            {"name": "@skip", "value": 5},
            {"name": "@limit", "value": 10},
        ]

    def test_with_tag(self):
        sql, parameters = build_find_query(ProductQuery(tag="nature"))

        assert "WHERE EXISTS(SELECT VALUE t FROM t IN c.tags WHERE t.title = @tag)" in sql
        assert sql.endswith("ORDER BY c.id ASC OFFSET @skip LIMIT @limit")
        assert {"name": "@tag", "value": "nature"} in parameters


class TestCosmosProductStore:
    """Test mapping between Cosmos DB items and products."""

    @pytest.mark.asyncio
    async def test_find_strips_system_properties(self, mock_client):
        mock_client.query_items.return_value = [_cosmos_item(id="p1"), _cosmos_item(id="p2")]
        store = CosmosProductStore(mock_client)

        products = await store.find(ProductQuery(tag="nature"))

        assert [p.id for p in products] == ["p1", "p2"]
        mock_client.query_items.assert_awaited_once()
        assert mock_client.query_items.await_args.kwargs["parameters"][0] == {
            "name": "@tag",
            "value": "nature",
        }

    @pytest.mark.asyncio
    async def test_find_by_id(self, mock_client):
        mock_client.read_item.return_value = _cosmos_item(id="p1")
        store = CosmosProductStore(mock_client)

        product = await store.find_by_id("p1")

        assert product.id == "p1"
        mock_client.read_item.assert_awaited_once_with("p1")

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, mock_client):
        store = CosmosProductStore(mock_client)

        assert await store.find_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_insert_creates_document(self, mock_client):
        product = Product.model_validate(build_product_fields(id="p1"))
        mock_client.create_item.return_value = _cosmos_item(id="p1")
        store = CosmosProductStore(mock_client)

        saved = await store.insert(product)

        assert saved.id == "p1"
        body = mock_client.create_item.await_args.args[0]
        assert body["id"] == "p1"
        assert "self" in body["links"]
        mock_client.upsert_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_insert_duplicate_id_propagates(self, mock_client):
        mock_client.create_item.side_effect = CosmosResourceExistsError(
            status_code=409, message="Entity with the specified id already exists"
        )
        store = CosmosProductStore(mock_client)

        with pytest.raises(CosmosResourceExistsError):
            await store.insert(Product.model_validate(build_product_fields(id="p1")))

    @pytest.mark.asyncio
    async def test_save_upserts_document(self, mock_client):
        mock_client.upsert_item.return_value = _cosmos_item(id="p1", likes=5)
        store = CosmosProductStore(mock_client)

        saved = await store.save(Product.model_validate(build_product_fields(id="p1", likes=5)))

        assert saved.likes == 5
        mock_client.create_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_one_counts(self, mock_client):
        store = CosmosProductStore(mock_client)

        assert await store.delete_one("p1") == 1

        mock_client.delete_item.return_value = False
        assert await store.delete_one("p1") == 0

    @pytest.mark.asyncio
    async def test_other_store_errors_propagate(self, mock_client):
        mock_client.query_items.side_effect = CosmosHttpResponseError(
            status_code=503, message="Service unavailable"
        )
        store = CosmosProductStore(mock_client)

        with pytest.raises(CosmosHttpResponseError):
            await store.find(ProductQuery())


class TestCosmosDBClient:
    """Test CosmosDBClient against a mocked container."""

    @pytest.mark.asyncio
    async def test_read_item_uses_id_as_partition_key(self, connected_client):
        connected_client._container.read_item = AsyncMock(return_value={"id": "p1"})

        assert await connected_client.read_item("p1") == {"id": "p1"}
        connected_client._container.read_item.assert_awaited_once_with(
            item="p1", partition_key="p1"
        )

    @pytest.mark.asyncio
    async def test_read_missing_item_returns_none(self, connected_client):
        connected_client._container.read_item = AsyncMock(
            side_effect=CosmosResourceNotFoundError(status_code=404, message="not found")
        )

        assert await connected_client.read_item("missing") is None

    @pytest.mark.asyncio
    async def test_delete_reports_whether_item_existed(self, connected_client):
        connected_client._container.delete_item = AsyncMock()
        assert await connected_client.delete_item("p1") is True

        connected_client._container.delete_item.side_effect = CosmosResourceNotFoundError(
            status_code=404, message="not found"
        )
        assert await connected_client.delete_item("p1") is False

    @pytest.mark.asyncio
    async def test_create_item_does_not_swallow_conflicts(self, connected_client):
        connected_client._container.create_item = AsyncMock(
            side_effect=CosmosResourceExistsError(status_code=409, message="conflict")
        )

        with pytest.raises(CosmosResourceExistsError):
            await connected_client.create_item({"id": "p1"})

    @pytest.mark.asyncio
    async def test_upsert_without_connection_raises(self):
        """Test that operations without connection raise RuntimeError."""
        client = CosmosDBClient(
            endpoint="https://localhost:8081",
            key="dGVzdA==",
            database_name="catalog",
            container_name="products",
        )

        with pytest.raises(RuntimeError, match="not connected"):
            await client.upsert_item({"id": "p1"})

        with pytest.raises(RuntimeError, match="not connected"):
            await client.query_items("SELECT * FROM c")
