"""Products catalogue and checkout flows."""

from .entities import FlowData, ProductData
from .module import ProductsModule
from .repositories import FlowRepository, ProductRepository
from .services import FlowService, ProductService

__all__ = [
    "FlowData",
    "ProductData",
    "ProductsModule",
    "FlowRepository",
    "ProductRepository",
    "FlowService",
    "ProductService",
]
