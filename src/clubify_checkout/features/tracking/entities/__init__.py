"""Tracking entities."""

from .event import CONVERSION_EVENTS, EVENT_TYPES, TrackingEventData

__all__ = ["CONVERSION_EVENTS", "EVENT_TYPES", "TrackingEventData"]
