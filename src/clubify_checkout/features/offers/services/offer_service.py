"""Offer services."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ....__version__ import __version__
from ....core.data import ResultPage
from ....core.exceptions import ConflictError, ValidationError
from ....core.service import RepositoryService
from ....core.slug import SlugRules
from ..entities import OfferData, UpsellData
from ..repositories import OfferRepository

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATION: Dict[str, Any] = {
    "checkout_config": {},
    "payment_methods": ["credit_card", "pix"],
    "design_config": {},
    "conversion_tools": {},
    "analytics": {"enabled": True},
}


class OfferService(RepositoryService):
    """Offer lifecycle: creation with unique slugs, publishing and lookups."""

    service_name = "offer"
    repository: OfferRepository

    async def create(self, data: Mapping[str, Any]) -> OfferData:
        return await self.execute_with_metrics("create", self._create, data)

    async def _create(self, data: Mapping[str, Any]) -> OfferData:
        offer = OfferData.from_dict(data)
        slug = await self.unique_slug(offer.slug or offer.name, self.repository.slug_exists)
        payload = self._with_defaults({**offer.to_payload(), "slug": slug})
        created = await self.repository.create(payload)
        logger.info(f"Offer created: {created.id} ({slug})")
        return created

    async def get(self, offer_id: str) -> Optional[OfferData]:
        return await self.repository.find(offer_id)

    async def get_by_slug(self, slug: str) -> Optional[OfferData]:
        return await self.repository.find_by_slug(slug)

    async def list(self, filters: Optional[Mapping[str, Any]] = None, limit: int = 50, offset: int = 0) -> ResultPage[OfferData]:
        return await self.repository.search(filters, {"created_at": "desc"}, limit=limit, offset=offset)

    async def update(self, offer_id: str, changes: Mapping[str, Any]) -> OfferData:
        OfferData.validate_patch(changes)
        return await self.execute_with_metrics("update", self.repository.update, offer_id, dict(changes))

    async def delete(self, offer_id: str) -> bool:
        return await self.execute_with_metrics("delete", self.repository.delete, offer_id)

    async def publish(self, offer_id: str) -> bool:
        published = await self.repository.update_status(offer_id, "active")
        if published:
            await self.dispatch("Offer.Published", {"id": offer_id})
        return published

    async def pause(self, offer_id: str) -> bool:
        return await self.repository.update_status(offer_id, "paused")

    async def change_slug(self, offer_id: str, new_slug: str) -> OfferData:
        """Move an offer to a new slug; a slug owned by another offer is a conflict."""
        slug = SlugRules.generate(new_slug)
        owner = await self.repository.find_by_slug(slug)
        if owner is not None and str(owner.id) != str(offer_id):
            raise ConflictError(f"Slug '{slug}' is already in use", details={"slug": slug, "offer_id": owner.id})

        return await self.repository.update(offer_id, {"slug": slug})

    def _with_defaults(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        payload.setdefault("status", "draft")
        if self.settings.organization_id:
            payload.setdefault("organization_id", self.settings.organization_id)
        payload["configuration"] = {**DEFAULT_CONFIGURATION, **(payload.get("configuration") or {})}
        payload["metadata"] = {
            "created_by": "sdk",
            "version": "1.0",
            "source": "api",
            "sdk_version": __version__,
            **(payload.get("metadata") or {}),
        }
        return payload


class UpsellService(RepositoryService):
    """Upsells attached to existing offers."""

    service_name = "upsell"
    repository: OfferRepository

    async def add(self, offer_id: str, data: Mapping[str, Any]) -> UpsellData:
        upsell = UpsellData.from_dict({**data, "offer_id": offer_id})
        if await self.repository.find(offer_id) is None:
            raise ValidationError(f"Offer {offer_id} not found", errors={"offer_id": ["offer does not exist"]})
        return await self.execute_with_metrics("add", self.repository.add_upsell, offer_id, upsell)

    async def list(self, offer_id: str) -> List[UpsellData]:
        return await self.repository.get_upsells(offer_id)
