"""Offer module façade."""

from typing import Any, Dict, Mapping, Optional

from ...core.module import BaseModule
from .entities import OfferData
from .repositories import OfferRepository
from .services import OfferService, UpsellService


class OfferModule(BaseModule):
    name = "offer"

    def repository(self) -> OfferRepository:
        return self._component("repository", lambda: self._build_repository(OfferRepository))

    def offers(self) -> OfferService:
        return self._component("offer_service", lambda: self._build_service(OfferService, self.repository()))

    def upsells(self) -> UpsellService:
        return self._component("upsell_service", lambda: self._build_service(UpsellService, self.repository()))

    async def create_offer(self, data: Mapping[str, Any]) -> OfferData:
        return await self.offers().create(data)

    async def get_public_offer(self, slug: str) -> Optional[OfferData]:
        """Offer by slug, only while it is live."""
        offer = await self.offers().get_by_slug(slug)
        if offer is None or not offer.is_active():
            return None
        return offer

    async def configure_theme(self, offer_id: str, theme: Mapping[str, Any]) -> Dict[str, Any]:
        return await self.repository().configure_theme(offer_id, theme)
