"""Analytics module façade."""

from ...core.module import BaseModule
from .repositories import AnalyticsRepository
from .services import AnalyticsService


class AnalyticsModule(BaseModule):
    name = "analytics"

    def repository(self) -> AnalyticsRepository:
        return self._component("repository", lambda: self._build_repository(AnalyticsRepository))

    def reports(self) -> AnalyticsService:
        return self._component("analytics_service", lambda: self._build_service(AnalyticsService, self.repository()))
