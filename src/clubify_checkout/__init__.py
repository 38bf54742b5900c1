"""Clubify Checkout SDK.

Async client for the Clubify Checkout multi-tenant e-commerce platform:
offers, products, carts, orders, customers, organizations, users, event
tracking and analytics, each behind a cache-aside repository.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__
from .client import ClubifyCheckout
from .config import CacheBackend, ClubifySettings, Environment, get_settings
from .core.exceptions import (
    CacheError,
    ClubifyError,
    ConfigurationError,
    ConflictError,
    HttpError,
    ModuleNotInitializedError,
    SlugGenerationError,
    ValidationError,
)
from .core.events import DomainEvent, EventDispatcher
from .features import (
    AnalyticsModule,
    CartModule,
    CustomersModule,
    OfferModule,
    OrdersModule,
    OrganizationModule,
    ProductsModule,
    TrackingModule,
    UserManagementModule,
)

__all__ = [
    "__version__",
    "ClubifyCheckout",
    # Configuration
    "CacheBackend",
    "ClubifySettings",
    "Environment",
    "get_settings",
    # Errors
    "CacheError",
    "ClubifyError",
    "ConfigurationError",
    "ConflictError",
    "HttpError",
    "ModuleNotInitializedError",
    "SlugGenerationError",
    "ValidationError",
    # Events
    "DomainEvent",
    "EventDispatcher",
    # Modules
    "AnalyticsModule",
    "CartModule",
    "CustomersModule",
    "OfferModule",
    "OrdersModule",
    "OrganizationModule",
    "ProductsModule",
    "TrackingModule",
    "UserManagementModule",
]
