"""Tracking services."""

from .tracking_service import MAX_BATCH_SIZE, TrackingService

__all__ = ["MAX_BATCH_SIZE", "TrackingService"]
