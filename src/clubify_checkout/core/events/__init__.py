"""Domain events."""

from .dispatcher import EventDispatcher, Listener
from .domain_event import DomainEvent

__all__ = ["DomainEvent", "EventDispatcher", "Listener"]
