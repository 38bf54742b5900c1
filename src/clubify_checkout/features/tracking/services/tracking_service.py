"""Event tracking service.

Events can be sent one at a time with :meth:`TrackingService.track`, as an
explicit batch with :meth:`TrackingService.track_batch`, or buffered with
:meth:`TrackingService.enqueue` and sent by :meth:`TrackingService.flush`.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ....core.data import BulkResult, ResultPage
from ....core.service import RepositoryService
from ..entities import TrackingEventData
from ..repositories import TrackingRepository

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100


class TrackingService(RepositoryService):
    service_name = "tracking"
    repository: TrackingRepository

    def __init__(self, repository: TrackingRepository, *args, batch_size: int = MAX_BATCH_SIZE, **kwargs):
        super().__init__(repository, *args, **kwargs)
        self.batch_size = max(1, min(batch_size, MAX_BATCH_SIZE))
        self._buffer: List[TrackingEventData] = []

    def build_event(self, data: Mapping[str, Any]) -> TrackingEventData:
        """Validate an event, stamping the time and organization when missing."""
        payload = dict(data)
        payload.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
        if self.settings.organization_id:
            payload.setdefault("organization_id", self.settings.organization_id)
        return TrackingEventData.from_dict(payload)

    async def track(self, data: Mapping[str, Any]) -> TrackingEventData:
        event = self.build_event(data)
        return await self.execute_with_metrics("track", self.repository.create, event)

    async def track_batch(self, events: Sequence[Mapping[str, Any]]) -> BulkResult:
        """Send events in chunks of at most ``batch_size``, dropping duplicates."""
        built = self._deduplicate([self.build_event(data) for data in events])
        return await self._send(built)

    def enqueue(self, data: Mapping[str, Any]) -> int:
        """Buffer an event for the next :meth:`flush`; returns the buffer size."""
        self._buffer.append(self.build_event(data))
        return len(self._buffer)

    def should_flush(self) -> bool:
        return len(self._buffer) >= self.batch_size

    @property
    def pending(self) -> int:
        return len(self._buffer)

    async def flush(self) -> BulkResult:
        """Send every buffered event; a chunk leaves the buffer once the API accepts it."""
        if not self._buffer:
            return BulkResult()
        self._buffer = self._deduplicate(self._buffer)
        total = BulkResult()
        while self._buffer:
            chunk = self._buffer[:self.batch_size]
            self._merge(total, await self._send_chunk(chunk))
            del self._buffer[:len(chunk)]
        logger.debug(f"Sent {total.count} tracking events")
        return total

    async def get_session_events(self, session_id: str, limit: int = 100, offset: int = 0) -> ResultPage[TrackingEventData]:
        return await self.repository.find_by_session(session_id, limit=limit, offset=offset)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "pending": len(self._buffer),
            "batch_size": self.batch_size,
            "metrics": self.get_metrics(),
        }

    async def _send(self, events: List[TrackingEventData]) -> BulkResult:
        total = BulkResult()
        for start in range(0, len(events), self.batch_size):
            self._merge(total, await self._send_chunk(events[start:start + self.batch_size]))
        logger.debug(f"Sent {total.count} tracking events")
        return total

    async def _send_chunk(self, chunk: List[TrackingEventData]) -> BulkResult:
        return await self.execute_with_metrics("track_batch", self.repository.bulk_create, chunk)

    @staticmethod
    def _merge(total: BulkResult, result: BulkResult) -> None:
        total.count += result.count
        total.ids.extend(result.ids)

    @staticmethod
    def _deduplicate(events: Sequence[TrackingEventData]) -> List[TrackingEventData]:
        seen = set()
        unique = []
        for event in events:
            key = event.dedupe_key()
            if key in seen:
                continue
            seen.add(key)
            unique.append(event)
        if len(unique) < len(events):
            logger.info(f"Dropped {len(events) - len(unique)} duplicate tracking events")
        return unique
