"""Offer repositories."""

from .offer_repository import OfferRepository

__all__ = ["OfferRepository"]
