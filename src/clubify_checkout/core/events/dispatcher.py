"""In-process event dispatcher."""

import fnmatch
import inspect
import logging
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Union

from .domain_event import DomainEvent

logger = logging.getLogger(__name__)

Listener = Callable[[DomainEvent], Union[None, Awaitable[None]]]


class EventDispatcher:
    """Fire-and-forget dispatcher.

    Listeners subscribe to an exact event name or a glob such as ``Offer.*``
    or ``*``. A failing listener is logged and never affects the emitter or
    the remaining listeners.
    """

    def __init__(self, enabled: bool = True, history_size: int = 100):
        self.enabled = enabled
        self._listeners: Dict[str, List[Listener]] = {}
        self._history: Deque[DomainEvent] = deque(maxlen=history_size)

    def subscribe(self, pattern: str, listener: Listener) -> None:
        self._listeners.setdefault(pattern, []).append(listener)
        logger.debug(f"Listener subscribed to {pattern}")

    def unsubscribe(self, pattern: str, listener: Listener) -> bool:
        listeners = self._listeners.get(pattern, [])
        if listener in listeners:
            listeners.remove(listener)
            return True
        return False

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._matching(event_name))

    async def emit(self, event_name: str, payload: Optional[Dict[str, Any]] = None) -> Optional[DomainEvent]:
        """Dispatch an event to every matching listener.

        Returns the dispatched event, or None when dispatching is disabled.
        """
        if not self.enabled:
            return None

        event = DomainEvent(name=event_name, payload=dict(payload or {}))
        self._history.append(event)

        for listener in self._matching(event_name):
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Listener for {event_name} failed: {e}", exc_info=True)

        logger.debug(f"Event dispatched: {event_name}")
        return event

    @property
    def dispatched(self) -> List[DomainEvent]:
        """Recently dispatched events, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def _matching(self, event_name: str) -> List[Listener]:
        matched: List[Listener] = []
        for pattern, listeners in self._listeners.items():
            if pattern == event_name or fnmatch.fnmatchcase(event_name, pattern):
                matched.extend(listeners)
        return matched
