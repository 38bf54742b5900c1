"""Domain modules of the checkout platform."""

from .analytics import AnalyticsModule
from .cart import CartModule
from .customers import CustomersModule
from .offers import OfferModule
from .orders import OrdersModule
from .organization import OrganizationModule
from .products import ProductsModule
from .tracking import TrackingModule
from .user_management import UserManagementModule

__all__ = [
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
