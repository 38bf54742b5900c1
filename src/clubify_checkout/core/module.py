"""Base module façade.

A module bundles one domain's repository and services. Components are built
lazily on first access, once per initialization, repository first.
"""

import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from ..__version__ import __version__
from ..config.settings import ClubifySettings
from .cache import CacheManager
from .events import EventDispatcher
from .exceptions import ModuleNotInitializedError
from .http import HttpClient
from .metrics import MetricsCollector

C = TypeVar("C")


class BaseModule:
    """Lifecycle and lazy wiring shared by every domain module."""

    name: str = "base"
    version: str = __version__

    def __init__(self):
        self.settings: Optional[ClubifySettings] = None
        self.logger: logging.Logger = logging.getLogger(f"clubify_checkout.modules.{self.name}")
        self.http_client: Optional[HttpClient] = None
        self.cache: Optional[CacheManager] = None
        self.events: Optional[EventDispatcher] = None
        self.metrics: Optional[MetricsCollector] = None
        self._initialized = False
        self._components: Dict[str, Any] = {}

    def initialize(self, settings: ClubifySettings, logger: Optional[logging.Logger] = None) -> None:
        self.settings = settings
        if logger is not None:
            self.logger = logger
        self._initialized = True
        self.logger.info(f"{self.name} module initialized (version {self.version})")

    def set_dependencies(
        self,
        http_client: HttpClient,
        cache: CacheManager,
        events: EventDispatcher,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.http_client = http_client
        self.cache = cache
        self.events = events
        self.metrics = metrics or self.metrics

    def is_initialized(self) -> bool:
        return self._initialized

    def is_available(self) -> bool:
        return self._initialized and self.settings is not None

    def get_name(self) -> str:
        return self.name

    def get_version(self) -> str:
        return self.version

    def get_status(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "initialized": self._initialized,
            "available": self.is_available(),
            "components": {key: True for key in self._components},
        }

    def cleanup(self) -> None:
        """Drop every built component and return to the uninitialized state."""
        self._components.clear()
        self._initialized = False
        self.logger.info(f"{self.name} module cleaned up")

    def _component(self, key: str, factory: Callable[[], C]) -> C:
        """Return the memoized component ``key``, building it on first use."""
        if not self._initialized:
            raise ModuleNotInitializedError(
                f"Module {self.name} must be initialized before use",
                details={"module": self.name, "component": key},
            )
        if key not in self._components:
            self._ensure_dependencies()
            self._components[key] = factory()
            self.logger.debug(f"{self.name} module built {key}")
        return self._components[key]

    def _ensure_dependencies(self) -> None:
        """Create default collaborators for anything not injected."""
        if self.http_client is None:
            self.http_client = HttpClient(self.settings)
        if self.cache is None:
            self.cache = CacheManager.from_settings(self.settings)
        if self.events is None:
            self.events = EventDispatcher(enabled=self.settings.events_enabled)
        if self.metrics is None:
            self.metrics = MetricsCollector()

    def _build_repository(self, repository_class: Callable[..., C]) -> C:
        return repository_class(
            self.http_client,
            self.cache,
            self.events,
            settings=self.settings,
            metrics=self.metrics,
        )

    def _build_service(self, service_class: Callable[..., C], *repositories: Any) -> C:
        return service_class(
            *repositories,
            settings=self.settings,
            cache=self.cache,
            events=self.events,
            metrics=self.metrics,
        )
