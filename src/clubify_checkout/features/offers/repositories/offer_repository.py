"""Offer repository."""

from typing import Any, Dict, List, Mapping, Optional

from ....core.data import extract_entity, extract_items
from ....core.repository import CacheAsideRepository
from ..entities import OfferData, UpsellData


class OfferRepository(CacheAsideRepository[OfferData]):
    endpoint = "offers"
    resource_name = "offer"
    entity_name = "Offer"
    entity_class = OfferData
    identifying_fields = ("name", "type", "slug")
    lookup_fields = ("slug",)

    async def find_by_slug(self, slug: str) -> Optional[OfferData]:
        return await self.find_by_lookup("slug", slug, f"{self.endpoint}/slug/{slug}")

    async def slug_exists(self, slug: str) -> bool:
        return await self.find_by_slug(slug) is not None

    async def find_by_organization(self, organization_id: str, limit: int = 100, offset: int = 0):
        return await self.find_by({"organization_id": organization_id}, limit=limit, offset=offset)

    async def configure_theme(self, offer_id: str, theme: Mapping[str, Any]) -> Dict[str, Any]:
        response = await self.http.put(f"{self.endpoint}/{offer_id}/theme", json_body=dict(theme))
        await self.invalidate_cache(offer_id)
        await self._emit("ThemeConfigured", {"id": offer_id})
        return extract_entity(response.data) or {}

    async def add_upsell(self, offer_id: str, upsell: UpsellData) -> UpsellData:
        response = await self.http.post(f"{self.endpoint}/{offer_id}/upsells", json_body=upsell.to_payload())
        await self.cache.delete(self.cache_key(offer_id, "upsells"))
        await self._emit("UpsellAdded", {"id": offer_id, "product_id": upsell.product_id, "type": upsell.type})
        return UpsellData.from_api(extract_entity(response.data) or {})

    async def get_upsells(self, offer_id: str) -> List[UpsellData]:
        data = await self._cached_fetch(
            self.cache_key(offer_id, "upsells"),
            self.list_ttl,
            f"{self.endpoint}/{offer_id}/upsells",
        )
        return [UpsellData.from_api(row) for row in extract_items(data)]
