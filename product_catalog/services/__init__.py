"""Service layer."""

from product_catalog.services.product_repository import (
    ProductRepository,
    create_product_repository,
    create_product_store,
)

__all__ = [
    "ProductRepository",
    "create_product_repository",
    "create_product_store",
]
