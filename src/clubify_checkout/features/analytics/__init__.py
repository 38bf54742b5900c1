"""Cached, read-only analytics reports."""

from .entities import ReportData
from .module import AnalyticsModule
from .repositories import AnalyticsRepository
from .services import AnalyticsService

__all__ = ["ReportData", "AnalyticsModule", "AnalyticsRepository", "AnalyticsService"]
