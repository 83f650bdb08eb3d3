"""Product catalog data access with document store and fixture fallback."""

from product_catalog.models import DeleteResult, Product, ProductChanges
from product_catalog.services import ProductRepository, create_product_repository

__all__ = [
    "DeleteResult",
    "Product",
    "ProductChanges",
    "ProductRepository",
    "create_product_repository",
]
