"""Tracking event repository."""

from ....core.data import ResultPage
from ....core.repository import CacheAsideRepository
from ..entities import TrackingEventData


class TrackingRepository(CacheAsideRepository[TrackingEventData]):
    endpoint = "tracking/events"
    resource_name = "tracking_event"
    entity_name = "TrackingEvent"
    entity_class = TrackingEventData
    identifying_fields = ("event_type", "session_id")

    async def find_by_session(self, session_id: str, limit: int = 100, offset: int = 0) -> ResultPage[TrackingEventData]:
        return await self.find_by({"session_id": session_id}, limit=limit, offset=offset)

    async def find_by_type(self, event_type: str, limit: int = 100, offset: int = 0) -> ResultPage[TrackingEventData]:
        return await self.find_by({"event_type": event_type}, limit=limit, offset=offset)
