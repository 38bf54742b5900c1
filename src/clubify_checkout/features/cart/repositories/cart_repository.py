"""Cart repository: carts, items, promotions, navigation and one-click."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ....core.data import extract_entity, extract_items
from ....core.exceptions import HttpError
from ....core.repository import CacheAsideRepository, hash_params
from ..entities import CartData, ItemData, NavigationData

logger = logging.getLogger(__name__)

NAVIGATION_PATH = "navigation/flow"


class CartRepository(CacheAsideRepository[CartData]):
    endpoint = "cart"
    resource_name = "cart"
    entity_name = "Cart"
    entity_class = CartData
    identifying_fields = ("session_id", "type", "customer_id")
    lookup_fields = ("session_id",)

    async def find_by_session(self, session_id: str) -> Optional[CartData]:
        async def load():
            data = await self._fetch_raw(self.endpoint, params={"session_id": session_id})
            rows = extract_items(data)
            return rows[0] if rows else None

        data = await self._remember_lookup(self.lookup_key("session_id", session_id), load)
        return self._to_entity(data)

    async def find_by_customer(self, customer_id: str) -> Optional[CartData]:
        data = await self._fetch_raw(self.endpoint, params={"customer_id": customer_id, "status": "active"})
        rows = extract_items(data)
        return CartData.from_api(rows[0]) if rows else None

    # Items

    async def add_item(self, cart_id: str, item: ItemData) -> CartData:
        return await self._mutate("POST", f"{self.endpoint}/{cart_id}/items", cart_id, "ItemAdded", item.to_payload())

    async def update_item(self, cart_id: str, item_id: str, changes: Mapping[str, Any]) -> CartData:
        return await self._mutate("PUT", f"{self.endpoint}/{cart_id}/items/{item_id}", cart_id, "ItemUpdated", dict(changes))

    async def remove_item(self, cart_id: str, item_id: str) -> CartData:
        return await self._mutate("DELETE", f"{self.endpoint}/{cart_id}/items/{item_id}", cart_id, "ItemRemoved")

    async def clear_items(self, cart_id: str) -> CartData:
        return await self._mutate("DELETE", f"{self.endpoint}/{cart_id}/items", cart_id, "ItemsCleared")

    async def get_items(self, cart_id: str) -> List[ItemData]:
        data = await self._fetch_raw(f"{self.endpoint}/{cart_id}/items")
        return [ItemData.from_api(row) for row in extract_items(data)]

    async def get_totals(self, cart_id: str) -> Dict[str, Any]:
        data = await self._fetch_raw(f"{self.endpoint}/{cart_id}/totals")
        return extract_entity(data) or {}

    # Promotions

    async def apply_promotion(self, cart_id: str, code: str) -> CartData:
        return await self._mutate("POST", f"{self.endpoint}/{cart_id}/promotions", cart_id, "PromotionApplied", {"code": code})

    async def remove_promotion(self, cart_id: str) -> CartData:
        return await self._mutate("DELETE", f"{self.endpoint}/{cart_id}/promotions", cart_id, "PromotionRemoved")

    async def validate_promotion(self, code: str, cart_id: str) -> Dict[str, Any]:
        response = await self.http.post("promotions/validate", json_body={"code": code, "cart_id": cart_id})
        return extract_entity(response.data) or {}

    # Checkout data

    async def update_shipping(self, cart_id: str, shipping: Mapping[str, Any]) -> CartData:
        return await self._mutate("PUT", f"{self.endpoint}/{cart_id}/shipping", cart_id, "ShippingUpdated", dict(shipping))

    async def update_billing(self, cart_id: str, billing: Mapping[str, Any]) -> CartData:
        return await self._mutate("PUT", f"{self.endpoint}/{cart_id}/billing", cart_id, "BillingUpdated", dict(billing))

    # Flow navigation

    async def start_navigation(self, offer_id: str, context: Optional[Mapping[str, Any]] = None) -> NavigationData:
        response = await self.http.post(f"{NAVIGATION_PATH}/{offer_id}", json_body=dict(context or {}))
        navigation = NavigationData.from_api(extract_entity(response.data) or {"offer_id": offer_id})
        await self._emit("NavigationStarted", {"id": navigation.id, "offer_id": offer_id})
        return navigation

    async def continue_navigation(self, navigation_id: str, step_data: Mapping[str, Any]) -> NavigationData:
        response = await self.http.post(f"{NAVIGATION_PATH}/navigation/{navigation_id}/continue", json_body=dict(step_data))
        return NavigationData.from_api(extract_entity(response.data) or {"id": navigation_id})

    async def get_navigation(self, navigation_id: str) -> Optional[NavigationData]:
        data = await self._fetch_entity(f"{NAVIGATION_PATH}/navigation/{navigation_id}")
        return NavigationData.from_api(data) if data else None

    async def complete_navigation(self, navigation_id: str) -> NavigationData:
        response = await self.http.post(f"{NAVIGATION_PATH}/navigation/{navigation_id}/complete")
        await self._emit("NavigationCompleted", {"id": navigation_id})
        return NavigationData.from_api(extract_entity(response.data) or {"id": navigation_id, "status": "completed"})

    # One-click

    async def process_one_click(self, cart_id: str, payment: Mapping[str, Any]) -> Dict[str, Any]:
        response = await self.http.post(f"{self.endpoint}/{cart_id}/one-click", json_body=dict(payment))
        await self.invalidate_cache(cart_id)
        await self._emit("OneClickProcessed", {"id": cart_id})
        return extract_entity(response.data) or {}

    async def validate_one_click(self, cart_id: str, payment: Mapping[str, Any]) -> Dict[str, Any]:
        response = await self.http.post(f"{self.endpoint}/{cart_id}/one-click/validate", json_body=dict(payment))
        return extract_entity(response.data) or {}

    # Lifecycle

    async def mark_as_abandoned(self, cart_id: str) -> CartData:
        return await self._mutate("PUT", f"{self.endpoint}/{cart_id}/abandon", cart_id, "Abandoned")

    async def convert_to_order(self, cart_id: str) -> Dict[str, Any]:
        response = await self.http.post(f"{self.endpoint}/{cart_id}/convert")
        result = extract_entity(response.data) or {}
        await self.invalidate_cache(cart_id)
        await self._emit("Converted", {"id": cart_id, "order_id": result.get("order_id") or result.get("id")})
        return result

    async def find_abandoned(self, hours_ago: int = 24) -> List[CartData]:
        data = await self._fetch_raw(f"{self.endpoint}/abandoned", params={"hours_ago": hours_ago})
        return [CartData.from_api(row) for row in extract_items(data)]

    async def cleanup_abandoned(self, days_ago: int = 30) -> int:
        try:
            response = await self.http.delete(f"{self.endpoint}/abandoned", params={"days_ago": days_ago})
        except HttpError as e:
            logger.error(f"Failed to clean up abandoned carts: {e.message}")
            return 0
        deleted = int((response.data or {}).get("deleted_count", 0)) if isinstance(response.data, dict) else 0
        if deleted:
            await self.clear_all_cache()
        logger.info(f"Abandoned carts cleaned up: {deleted}")
        return deleted

    async def get_statistics(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        params = dict(filters or {})
        data = await self._cached_fetch(
            self.cache_key("stats", hash_params(params)),
            self.settings.cache_ttl_stats,
            f"{self.endpoint}/statistics",
            params=params,
        )
        return data if isinstance(data, dict) else {}

    async def _mutate(
        self,
        method: str,
        uri: str,
        cart_id: str,
        event: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> CartData:
        response = await self.http.request(method, uri, json_body=body)
        await self.invalidate_cache(cart_id)
        await self._emit(event, {"id": cart_id})
        return CartData.from_api(extract_entity(response.data) or {"id": cart_id})
