"""Core building blocks shared by every domain module."""

from .cache import CacheManager, MemoryAdapter
from .data import BaseData, BulkResult, ResultPage
from .events import DomainEvent, EventDispatcher
from .exceptions import (
    ClubifyError,
    ConfigurationError,
    ConflictError,
    HttpError,
    ModuleNotInitializedError,
    SlugGenerationError,
    ValidationError,
)
from .http import HttpClient, HttpResponse
from .metrics import MetricsCollector, OperationContext
from .module import BaseModule
from .repository import CacheAsideRepository, hash_params
from .service import BaseService, RepositoryService
from .slug import SlugRules, resolve_unique_slug
from .validation import RuleValidator

__all__ = [
    "CacheManager",
    "MemoryAdapter",
    "BaseData",
    "BulkResult",
    "ResultPage",
    "DomainEvent",
    "EventDispatcher",
    "ClubifyError",
    "ConfigurationError",
    "ConflictError",
    "HttpError",
    "ModuleNotInitializedError",
    "SlugGenerationError",
    "ValidationError",
    "HttpClient",
    "HttpResponse",
    "MetricsCollector",
    "OperationContext",
    "BaseModule",
    "CacheAsideRepository",
    "hash_params",
    "BaseService",
    "RepositoryService",
    "SlugRules",
    "resolve_unique_slug",
    "RuleValidator",
]
