"""Offers: sellable bundles with pricing, themes and upsells."""

from .entities import OfferData, UpsellData
from .module import OfferModule
from .repositories import OfferRepository
from .services import OfferService, UpsellService

__all__ = ["OfferData", "UpsellData", "OfferModule", "OfferRepository", "OfferService", "UpsellService"]
