"""Offer services."""

from .offer_service import DEFAULT_CONFIGURATION, OfferService, UpsellService

__all__ = ["DEFAULT_CONFIGURATION", "OfferService", "UpsellService"]
