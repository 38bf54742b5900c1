"""Product repositories."""

from .product_repository import FlowRepository, ProductRepository

__all__ = ["FlowRepository", "ProductRepository"]
