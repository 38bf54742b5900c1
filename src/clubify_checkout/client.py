"""Client entry point.

:class:`ClubifyCheckout` owns the shared collaborators (HTTP transport,
cache, event dispatcher, metrics) and hands them to every domain module.
Modules are created and initialized on first access.
"""

import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from .__version__ import __version__
from .config.settings import ClubifySettings, get_settings
from .core.cache import CacheManager
from .core.events import EventDispatcher
from .core.http import HttpClient
from .core.metrics import MetricsCollector
from .core.module import BaseModule
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

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModule)


class ClubifyCheckout:
    """Facade over every checkout domain module.

    Example::

        async with ClubifyCheckout(ClubifySettings(api_key="...", tenant_id="t1")) as sdk:
            offer = await sdk.offer.create_offer({"name": "Course", "type": "single_product"})
    """

    def __init__(
        self,
        settings: Optional[ClubifySettings] = None,
        http_client: Optional[HttpClient] = None,
        cache: Optional[CacheManager] = None,
        events: Optional[EventDispatcher] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.settings = settings or get_settings()
        self._owns_http_client = http_client is None
        self.http_client = http_client or HttpClient(self.settings)
        self._owns_cache = cache is None
        self.cache = cache or CacheManager.from_settings(self.settings)
        self.events = events or EventDispatcher(enabled=self.settings.events_enabled)
        self.metrics = metrics or MetricsCollector()
        self._modules: Dict[str, BaseModule] = {}
        logger.debug(f"Client created for {self.settings.api_base_url} (tenant {self.settings.tenant_id or 'default'})")

    def module(self, module_class: Type[M]) -> M:
        """Return the initialized module instance for ``module_class``."""
        key = module_class.name
        if key not in self._modules:
            instance = module_class()
            instance.set_dependencies(self.http_client, self.cache, self.events, self.metrics)
            instance.initialize(self.settings)
            self._modules[key] = instance
        return self._modules[key]  # type: ignore[return-value]

    @property
    def offer(self) -> OfferModule:
        return self.module(OfferModule)

    @property
    def products(self) -> ProductsModule:
        return self.module(ProductsModule)

    @property
    def cart(self) -> CartModule:
        return self.module(CartModule)

    @property
    def orders(self) -> OrdersModule:
        return self.module(OrdersModule)

    @property
    def customers(self) -> CustomersModule:
        return self.module(CustomersModule)

    @property
    def organization(self) -> OrganizationModule:
        return self.module(OrganizationModule)

    @property
    def user_management(self) -> UserManagementModule:
        return self.module(UserManagementModule)

    @property
    def tracking(self) -> TrackingModule:
        return self.module(TrackingModule)

    @property
    def analytics(self) -> AnalyticsModule:
        return self.module(AnalyticsModule)

    def on(self, pattern: str, listener: Callable[..., Any]) -> None:
        """Subscribe to domain events, e.g. ``Offer.*``."""
        self.events.subscribe(pattern, listener)

    def get_status(self) -> Dict[str, Any]:
        return {
            "version": __version__,
            "environment": self.settings.environment.value,
            "base_url": self.settings.api_base_url,
            "tenant_id": self.settings.tenant_id,
            "cache": self.cache.stats(),
            "modules": {name: module.get_status() for name, module in self._modules.items()},
            "metrics": self.metrics.snapshot(),
        }

    async def health_check(self) -> Dict[str, Any]:
        return {
            "cache": await self.cache.health_check(),
            "modules": {name: module.is_available() for name, module in self._modules.items()},
        }

    async def close(self) -> None:
        """Clean up modules and release the cache and transport."""
        for module in self._modules.values():
            module.cleanup()
        self._modules.clear()
        if self._owns_cache:
            await self.cache.shutdown()
        if self._owns_http_client:
            await self.http_client.close()
        logger.debug("Client closed")

    async def __aenter__(self) -> "ClubifyCheckout":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
