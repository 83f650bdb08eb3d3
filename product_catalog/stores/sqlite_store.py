"""SQLite document store for products.

Each product is kept as a JSON document keyed by id, so the store behaves
like the Cosmos DB container for local development and tests.
"""

import json
import logging
from typing import Optional

from product_catalog.clients import SqliteClient
from product_catalog.models import Product
from product_catalog.stores.base import ProductQuery, ProductStore

logger = logging.getLogger(__name__)

# SQL statements
CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    document TEXT NOT NULL
)
"""

TAG_FILTER_SQL = """
EXISTS (
    SELECT 1 FROM json_each(products.document, '$.tags') AS tag
    WHERE json_extract(tag.value, '$.title') = ?
)
"""

INSERT_SQL = "INSERT INTO products (id, document) VALUES (?, ?)"

UPSERT_SQL = """
INSERT INTO products (id, document) VALUES (?, ?)
ON CONFLICT(id) DO UPDATE SET document = excluded.document
"""


class SqliteProductStore(ProductStore):
    """Product store on a local SQLite file."""

    def __init__(self, db_path: str = "products.db"):
        self._db_path = db_path
        self._sqlite_client: Optional[SqliteClient] = None

    async def connect(self) -> None:
        self._sqlite_client = SqliteClient(self._db_path)
        self._sqlite_client.execute_write(CREATE_TABLE_SQL)
        logger.debug(f"Product table initialized in {self._db_path}")

    async def close(self) -> None:
        if self._sqlite_client:
            self._sqlite_client.close()
            self._sqlite_client = None

    def _require_client(self) -> SqliteClient:
        if self._sqlite_client is None:
            raise RuntimeError("SQLite product store not connected. Call connect() first.")
        return self._sqlite_client

    async def find(self, query: ProductQuery) -> list[Product]:
        client = self._require_client()

        sql = "SELECT document FROM products"
        params: list = []
        if query.tag:
            sql += f" WHERE {TAG_FILTER_SQL}"
            params.append(query.tag)
        sql += f" ORDER BY {query.sort} ASC LIMIT ? OFFSET ?"
        params.extend([query.limit, query.skip])

        rows = client.execute_query(sql, params)
        logger.debug(f"SQLite query returned {len(rows)} products for {query}")
        return [Product.model_validate(json.loads(row[0])) for row in rows]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        client = self._require_client()

        rows = client.execute_query(
            "SELECT document FROM products WHERE id = ?", (product_id,)
        )
        if not rows:
            return None
        return Product.model_validate(json.loads(rows[0][0]))

    async def insert(self, product: Product) -> Product:
        """Insert a new product.

        Raises:
            sqlite3.IntegrityError: If a product with this id already exists.
        """
        client = self._require_client()

        client.execute_write(INSERT_SQL, (product.id, json.dumps(product.to_document())))
        return product

    async def save(self, product: Product) -> Product:
        client = self._require_client()

        client.execute_write(UPSERT_SQL, (product.id, json.dumps(product.to_document())))
        return product

    async def delete_one(self, product_id: str) -> int:
        client = self._require_client()

        return client.execute_write("DELETE FROM products WHERE id = ?", (product_id,))
