"""Analytics repositories."""

from .analytics_repository import REPORT_ENDPOINTS, AnalyticsRepository

__all__ = ["REPORT_ENDPOINTS", "AnalyticsRepository"]
