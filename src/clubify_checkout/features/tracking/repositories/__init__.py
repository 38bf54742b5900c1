"""Tracking repositories."""

from .tracking_repository import TrackingRepository

__all__ = ["TrackingRepository"]
