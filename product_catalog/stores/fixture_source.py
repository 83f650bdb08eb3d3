"""Read-only product source backed by a static JSON fixture file."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from product_catalog.models import Product

logger = logging.getLogger(__name__)


class FixtureProductSource:
    """Sample products loaded from a JSON array on disk.

    The file is parsed on every call and never written, so concurrent
    reads need no coordination.
    """

    def __init__(self, path: str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[Product]:
        with open(self._path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(
                f"Fixture file {self._path} must contain a JSON array, "
                f"got {type(data).__name__}"
            )

        return [Product.model_validate(entry) for entry in data]

    async def list(
        self,
        tag: Optional[str] = None,
        offset: int = 0,
        limit: int = 25,
    ) -> list[Product]:
        """Return fixture products with the tag, windowed in file order.

        Raises:
            FileNotFoundError: If the fixture file is missing.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the file is not an array of valid products.
        """
        products = await asyncio.to_thread(self._load)

        if tag:
            products = [product for product in products if product.has_tag(tag)]

        logger.debug(f"Fixture {self._path.name} has {len(products)} products matching tag={tag!r}")
        return products[offset:offset + limit]
