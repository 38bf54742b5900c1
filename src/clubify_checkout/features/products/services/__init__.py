"""Product services."""

from .product_service import FlowService, ProductService

__all__ = ["FlowService", "ProductService"]
