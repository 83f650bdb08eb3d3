"""Abstract document store for products.

Concrete stores (Cosmos DB, SQLite) implement the same small capability
set so the repository never depends on a particular database engine.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from product_catalog.models import Product

SORTABLE_FIELDS = ("id",)


@dataclass(frozen=True)
class ProductQuery:
    """Filter, sort and page window for a store lookup."""

    tag: Optional[str] = None
    skip: int = 0
    limit: int = 25
    sort: str = "id"  # ascending

    def __post_init__(self):
        if self.skip < 0:
            raise ValueError(f"skip must be >= 0, got {self.skip}")
        if self.limit <= 0:
            raise ValueError(f"limit must be > 0, got {self.limit}")
        if self.sort not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field '{self.sort}'")


class ProductStore(ABC):
    """Persistent document store holding live product records."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying connection."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    async def find(self, query: ProductQuery) -> list[Product]:
        """Return products matching the query, sorted and windowed."""

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Optional[Product]:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    async def insert(self, product: Product) -> Product:
        """Persist a new product; an existing id is an error raised by the store."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Replace the product with the same id, or persist it if new."""

    @abstractmethod
    async def delete_one(self, product_id: str) -> int:
        """Delete a product by ID and return the number of removed records."""

    async def __aenter__(self) -> "ProductStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False
