"""Behavioural event tracking."""

from .entities import TrackingEventData
from .module import TrackingModule
from .repositories import TrackingRepository
from .services import TrackingService

__all__ = ["TrackingEventData", "TrackingModule", "TrackingRepository", "TrackingService"]
