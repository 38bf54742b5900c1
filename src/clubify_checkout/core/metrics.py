"""Operation metrics: call counts, error counts and durations."""

import functools
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class OperationStats:
    """Aggregated measurements of one named operation."""
    calls: int = 0
    errors: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    @property
    def average_ms(self) -> float:
        return self.total_ms / self.calls if self.calls else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calls": self.calls,
            "errors": self.errors,
            "total_ms": round(self.total_ms, 2),
            "average_ms": round(self.average_ms, 2),
            "max_ms": round(self.max_ms, 2),
        }


class MetricsCollector:
    """In-memory store of :class:`OperationStats` keyed by operation name."""

    def __init__(self):
        self._operations: Dict[str, OperationStats] = {}

    def record(self, operation: str, duration_ms: float, failed: bool = False) -> None:
        stats = self._operations.setdefault(operation, OperationStats())
        stats.calls += 1
        stats.total_ms += duration_ms
        stats.max_ms = max(stats.max_ms, duration_ms)
        if failed:
            stats.errors += 1

    def get(self, operation: str) -> OperationStats:
        return self._operations.get(operation, OperationStats())

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        return {name: stats.to_dict() for name, stats in self._operations.items()}

    def reset(self) -> None:
        self._operations.clear()

    def track(self, operation: str, **context: Any) -> "OperationContext":
        return OperationContext(operation, self, **context)


class OperationContext:
    """Async context manager timing and logging one operation."""

    def __init__(
        self,
        operation: str,
        collector: Optional[MetricsCollector] = None,
        log_level: int = logging.DEBUG,
        **context: Any,
    ):
        self.operation = operation
        self.collector = collector
        self.log_level = log_level
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}
        self._started: Optional[float] = None
        self.failed = False

    async def __aenter__(self) -> "OperationContext":
        self._started = time.perf_counter()
        logger.log(self.log_level, f"Starting {self.operation} | {self.context}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        duration_ms = (time.perf_counter() - self._started) * 1000 if self._started else 0.0
        self.context["duration_ms"] = f"{duration_ms:.2f}"

        if self.collector is not None:
            self.collector.record(self.operation, duration_ms, failed=exc_type is not None or self.failed)

        if exc_type:
            self.context["error"] = str(exc_val)
            self.context["error_type"] = exc_type.__name__
            logger.error(f"Failed {self.operation} | {self.context}")
        elif self.failed:
            logger.warning(f"Failed {self.operation} | {self.context}")
        else:
            logger.log(self.log_level, f"Completed {self.operation} | {self.context}")

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    def mark_failed(self, reason: Optional[str] = None) -> None:
        """Count the operation as failed although it returns normally."""
        self.failed = True
        if reason:
            self.context["error"] = reason


def with_metrics(operation: str) -> Callable:
    """Decorate an async method of an object exposing ``metrics``.

    The operation name is prefixed with the object's ``metrics_prefix`` when
    it has one, e.g. ``offer.create``.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> Any:
            prefix = getattr(self, "metrics_prefix", None)
            name = f"{prefix}.{operation}" if prefix else operation
            async with OperationContext(name, getattr(self, "metrics", None)):
                return await func(self, *args, **kwargs)
        return wrapper
    return decorator
