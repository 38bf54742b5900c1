"""Offer entities."""

from .offer import OFFER_STATUSES, OFFER_TYPES, UPSELL_TYPES, OfferData, UpsellData

__all__ = ["OFFER_STATUSES", "OFFER_TYPES", "UPSELL_TYPES", "OfferData", "UpsellData"]
