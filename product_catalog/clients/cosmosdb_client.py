"""Azure Cosmos DB client for product documents.

Products are partitioned on their own id, so every point operation uses
the document id as the partition key.
"""

import logging
from typing import Any, Optional

from azure.cosmos.aio import CosmosClient
from azure.cosmos.aio._container import ContainerProxy
from azure.cosmos.aio._database import DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

logger = logging.getLogger(__name__)

PARTITION_KEY_PATH = "/id"


class CosmosDBClient:
    """Async client for one product container.

    connect() creates the database and container when missing.
    """

    def __init__(self, endpoint: str, key: str, database_name: str, container_name: str):
        self._endpoint = endpoint
        self._key = key
        self._database_name = database_name
        self._container_name = container_name

        self._client: Optional[CosmosClient] = None
        self._database: Optional[DatabaseProxy] = None
        self._container: Optional[ContainerProxy] = None

    async def connect(self) -> None:
        """Open the account connection and ensure database/container exist."""
        self._client = CosmosClient(url=self._endpoint, credential=self._key)
        await self._client.__aenter__()

        self._database = await self._client.create_database_if_not_exists(id=self._database_name)
        self._container = await self._database.create_container_if_not_exists(
            id=self._container_name,
            partition_key={"paths": [PARTITION_KEY_PATH], "kind": "Hash"},
        )
        logger.info(f"Connected to Cosmos DB container {self._database_name}/{self._container_name}")

    async def close(self) -> None:
        """Close the Cosmos DB connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None
            self._container = None

    def _require_container(self) -> ContainerProxy:
        if self._container is None:
            raise RuntimeError("CosmosDB client not connected. Call connect() first.")
        return self._container

    async def create_item(self, document: dict[str, Any]) -> dict[str, Any]:
        """Insert a new product document.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceExistsError: If a document with this id already exists.
        """
        container = self._require_container()
        return dict(await container.create_item(body=document))

    async def upsert_item(self, document: dict[str, Any]) -> dict[str, Any]:
        """Replace the product document with the same id, or insert it."""
        container = self._require_container()
        return dict(await container.upsert_item(body=document))

    async def query_items(
        self,
        query: str,
        parameters: Optional[list[dict[str, Any]]] = None,
    ) -> list[dict[str, Any]]:
        """Run a cross-partition SQL query and collect the documents.

        Args:
            query: SQL query string
            parameters: Query parameters as list of {"name": "@param", "value": value}
        """
        container = self._require_container()

        return [dict(item) async for item in container.query_items(query=query, parameters=parameters)]

    async def read_item(self, item_id: str) -> Optional[dict[str, Any]]:
        """Read a product document by id, or None if it does not exist."""
        container = self._require_container()

        try:
            return dict(await container.read_item(item=item_id, partition_key=item_id))
        except CosmosResourceNotFoundError:
            return None

    async def delete_item(self, item_id: str) -> bool:
        """Delete a product document by id. Returns False if it did not exist."""
        container = self._require_container()

        try:
            await container.delete_item(item=item_id, partition_key=item_id)
        except CosmosResourceNotFoundError:
            return False
        return True
