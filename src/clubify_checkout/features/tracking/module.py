"""Tracking module façade."""

from typing import Any, Mapping

from ...core.module import BaseModule
from .entities import TrackingEventData
from .repositories import TrackingRepository
from .services import TrackingService


class TrackingModule(BaseModule):
    name = "tracking"

    def repository(self) -> TrackingRepository:
        return self._component("repository", lambda: self._build_repository(TrackingRepository))

    def tracker(self) -> TrackingService:
        return self._component("tracking_service", lambda: self._build_service(TrackingService, self.repository()))

    async def track(self, data: Mapping[str, Any]) -> TrackingEventData:
        return await self.tracker().track(data)

    def cleanup(self) -> None:
        service = self._components.get("tracking_service")
        if service is not None and service.pending:
            self.logger.warning(f"Discarding {service.pending} unsent tracking events")
        super().cleanup()
