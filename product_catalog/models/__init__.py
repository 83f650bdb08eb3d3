"""Data models module."""

from product_catalog.models.product import (
    DeleteResult,
    Product,
    ProductChanges,
    ProductLinks,
    ProductTag,
    ProductUrls,
    ProductUser,
    new_product_id,
)

__all__ = [
    "DeleteResult",
    "Product",
    "ProductChanges",
    "ProductLinks",
    "ProductTag",
    "ProductUrls",
    "ProductUser",
    "new_product_id",
]
