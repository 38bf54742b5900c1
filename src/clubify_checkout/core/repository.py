"""Cache-aside repository over the REST API.

Reads consult the cache first and populate it on a miss; writes go to the
remote service and then invalidate every cached view of the entity.
"""

import hashlib
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from ..config.settings import ClubifySettings
from .cache import CacheManager
from .data import BaseData, BulkResult, ResultPage, extract_entity
from .events import EventDispatcher
from .exceptions import HttpError
from .http import HttpClient
from .metrics import MetricsCollector, OperationContext, with_metrics

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseData)

# Cache key segments holding query results rather than single entities
QUERY_SEGMENTS = ("all", "by", "ids", "search", "count")


def hash_params(params: Any) -> str:
    """Deterministic digest of a parameter set."""
    canonical = json.dumps(params, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()


class CacheAsideRepository(Generic[T]):
    """Base repository for one REST resource.

    Subclasses set:
        endpoint: collection path, e.g. ``offers``
        resource_name: cache namespace, e.g. ``offer``
        entity_name: event prefix, e.g. ``Offer``
        entity_class: the :class:`BaseData` subclass
        identifying_fields: fields copied into event payloads
        lookup_fields: fields with their own cache key, e.g. ``slug``
    """

    endpoint: str = ""
    resource_name: str = ""
    entity_name: str = ""
    entity_class: Type[BaseData] = BaseData
    identifying_fields: Sequence[str] = ("name",)
    lookup_fields: Sequence[str] = ()

    def __init__(
        self,
        http_client: HttpClient,
        cache: CacheManager,
        events: EventDispatcher,
        settings: Optional[ClubifySettings] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.http = http_client
        self.cache = cache
        self.events = events
        self.settings = settings or http_client.settings
        self.metrics = metrics
        self.metrics_prefix = f"{self.resource_name}_repository"

    # Cache keys

    def cache_key(self, *parts: Any) -> str:
        return ":".join([self.resource_name, *(str(part) for part in parts)])

    def entity_key(self, entity_id: Any) -> str:
        return self.cache_key(entity_id)

    def lookup_key(self, field_name: str, value: Any) -> str:
        return self.cache_key(field_name, value)

    def lookups_key(self, entity_id: Any) -> str:
        """Index of the lookup keys currently caching one entity."""
        return self.cache_key(entity_id, "lookups")

    @property
    def find_ttl(self) -> int:
        return self.settings.cache_ttl_find

    @property
    def list_ttl(self) -> int:
        return self.settings.cache_ttl_list

    @property
    def search_ttl(self) -> int:
        return self.settings.cache_ttl_search

    # Reads

    async def find(self, entity_id: Any) -> Optional[T]:
        """Point lookup; 404 yields None and nothing is cached."""
        data = await self.cache.remember(
            self.entity_key(entity_id),
            self.find_ttl,
            lambda: self._fetch_entity(f"{self.endpoint}/{entity_id}"),
        )
        return self._to_entity(data)

    async def find_by_lookup(self, field_name: str, value: Any, uri: str) -> Optional[T]:
        """Point lookup by a secondary key such as a slug."""
        data = await self._remember_lookup(self.lookup_key(field_name, value), lambda: self._fetch_entity(uri))
        return self._to_entity(data)

    async def find_by_ids(self, ids: Sequence[Any]) -> List[T]:
        if not ids:
            return []
        data = await self.cache.remember(
            self.cache_key("ids", hash_params(sorted(str(i) for i in ids))),
            self.list_ttl,
            lambda: self._fetch_raw(self.endpoint, params={"ids": list(ids)}),
        )
        return ResultPage.from_api(data, self.entity_class).items

    async def find_all(self, limit: int = 100, offset: int = 0) -> ResultPage[T]:
        data = await self.cache.remember(
            self.cache_key("all", limit, offset),
            self.list_ttl,
            lambda: self._fetch_raw(self.endpoint, params={"limit": limit, "offset": offset}),
        )
        return ResultPage.from_api(data, self.entity_class, limit=limit, offset=offset)

    async def find_by(self, criteria: Mapping[str, Any], limit: int = 100, offset: int = 0) -> ResultPage[T]:
        params = {**criteria, "limit": limit, "offset": offset}
        data = await self.cache.remember(
            self.cache_key("by", hash_params(params)),
            self.list_ttl,
            lambda: self._fetch_raw(self.endpoint, params=params),
        )
        return ResultPage.from_api(data, self.entity_class, limit=limit, offset=offset)

    async def find_one_by(self, criteria: Mapping[str, Any]) -> Optional[T]:
        page = await self.find_by(criteria, limit=1)
        return page.items[0] if page.items else None

    async def exists(self, entity_id: Any) -> bool:
        return await self.find(entity_id) is not None

    async def count(self, criteria: Optional[Mapping[str, Any]] = None) -> int:
        params = dict(criteria or {})
        data = await self.cache.remember(
            self.cache_key("count", hash_params(params)),
            self.find_ttl,
            lambda: self._fetch_raw(f"{self.endpoint}/count", params=params),
        )
        if isinstance(data, dict):
            return int(data.get("count", data.get("total", 0)) or 0)
        if isinstance(data, int):
            return data
        return 0

    @with_metrics("search")
    async def search(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        sort: Optional[Mapping[str, Any]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> ResultPage[T]:
        payload = {"filters": dict(filters or {}), "sort": dict(sort or {}), "limit": limit, "offset": offset}

        async def load():
            response = await self.http.post(f"{self.endpoint}/search", json_body=payload)
            return response.data

        data = await self.cache.remember(self.cache_key("search", hash_params(payload)), self.search_ttl, load)
        return ResultPage.from_api(data, self.entity_class, limit=limit, offset=offset)

    # Writes

    @with_metrics("create")
    async def create(self, data: Union[T, Mapping[str, Any]]) -> T:
        payload = self._payload(data)
        response = await self.http.post(self.endpoint, json_body=payload)
        created = extract_entity(response.data) or {}
        entity = self.entity_class.from_api(created)

        if entity.id is not None:
            await self._store(created)
        await self._invalidate_queries()
        await self._emit("Created", self._event_payload(created, payload))
        return entity

    @with_metrics("update")
    async def update(self, entity_id: Any, data: Union[T, Mapping[str, Any]]) -> T:
        payload = self._payload(data)
        response = await self.http.put(f"{self.endpoint}/{entity_id}", json_body=payload)
        updated = extract_entity(response.data) or {**payload, "id": entity_id}

        await self.invalidate_cache(entity_id)
        await self._emit("Updated", {"id": entity_id, "changes": sorted(payload.keys())})
        return self.entity_class.from_api(updated)

    async def delete(self, entity_id: Any) -> bool:
        """True only when the remote service answers 204."""
        async with OperationContext(f"{self.metrics_prefix}.delete", self.metrics) as operation:
            try:
                response = await self.http.delete(f"{self.endpoint}/{entity_id}")
            except HttpError as e:
                logger.error(f"Failed to delete {self.resource_name} {entity_id}: {e.message}")
                operation.mark_failed(e.message)
                return False

            if response.status_code != 204:
                logger.warning(f"Delete of {self.resource_name} {entity_id} returned {response.status_code}")
                operation.mark_failed(f"status {response.status_code}")
                return False

        await self.invalidate_cache(entity_id)
        await self._emit("Deleted", {"id": entity_id})
        return True

    @with_metrics("bulk_create")
    async def bulk_create(self, items: Sequence[Union[T, Mapping[str, Any]]]) -> BulkResult:
        payloads = [self._payload(item) for item in items]
        response = await self.http.post(f"{self.endpoint}/bulk", json_body={"items": payloads})
        result = BulkResult.from_api(response.data)
        if not result.count and not result.ids:
            result.count = len(payloads)

        for entity_id in result.ids:
            await self.invalidate_cache(entity_id)
        await self._invalidate_queries()
        await self._emit("BulkCreated", {"count": result.count, "ids": result.ids})
        return result

    @with_metrics("bulk_update")
    async def bulk_update(self, updates: Mapping[Any, Mapping[str, Any]]) -> BulkResult:
        body = {str(entity_id): dict(patch) for entity_id, patch in updates.items()}
        response = await self.http.put(f"{self.endpoint}/bulk", json_body={"updates": body})
        result = BulkResult.from_api(response.data, fallback_ids=list(updates.keys()))

        for entity_id in updates:
            await self.invalidate_cache(entity_id)
        await self._emit("BulkUpdated", {"count": result.count, "ids": list(updates.keys())})
        return result

    async def update_status(self, entity_id: Any, status: str) -> bool:
        return await self._patch_action(entity_id, "status", "StatusUpdated", {"status": status})

    async def archive(self, entity_id: Any) -> bool:
        return await self._patch_action(entity_id, "archive", "Archived")

    async def restore(self, entity_id: Any) -> bool:
        return await self._patch_action(entity_id, "restore", "Restored")

    # Cache maintenance

    async def invalidate_cache(self, entity_id: Any) -> None:
        """Drop every cached view of one entity and all query results."""
        keys = set(await self.cache.get(self.lookups_key(entity_id)) or [])
        cached = await self.cache.get(self.entity_key(entity_id))
        if isinstance(cached, dict):
            keys.update(self._lookup_keys(cached))
        for key in sorted(keys):
            await self.cache.delete(key)

        await self.cache.delete(self.entity_key(entity_id))
        await self.cache.delete_pattern(self.cache_key(entity_id, "*"))
        await self.cache.delete_pattern(self.cache_key("*", entity_id))
        await self._invalidate_queries()

    async def clear_all_cache(self) -> int:
        return await self.cache.delete_pattern(self.cache_key("*"))

    async def warm_cache(self, entity_id: Any) -> Optional[T]:
        """Refetch an entity into the cache."""
        await self.cache.delete(self.entity_key(entity_id))
        return await self.find(entity_id)

    # Helpers for subclasses

    async def _fetch_entity(self, uri: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """GET a single entity; 404 means absent."""
        data = await self._fetch_raw(uri, params=params)
        return extract_entity(data)

    async def _fetch_raw(self, uri: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        try:
            response = await self.http.get(uri, params=params)
        except HttpError as e:
            if e.is_not_found:
                return None
            raise
        return response.data

    async def _cached_fetch(self, key: str, ttl: int, uri: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Cache-aside GET for sub-resources; ``key`` is a full cache key."""
        return await self.cache.remember(key, ttl, lambda: self._fetch_raw(uri, params=params))

    async def _patch_action(
        self,
        entity_id: Any,
        action: str,
        event: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """PATCH ``{endpoint}/{id}/{action}``; failures are logged and yield False."""
        name = f"{self.metrics_prefix}.{action}"
        async with OperationContext(name, self.metrics) as operation:
            try:
                await self.http.patch(f"{self.endpoint}/{entity_id}/{action}", json_body=dict(body or {}))
            except HttpError as e:
                logger.error(f"Failed to {action} {self.resource_name} {entity_id}: {e.message}")
                operation.mark_failed(e.message)
                return False

        await self.invalidate_cache(entity_id)
        await self._emit(event, {"id": entity_id, **dict(body or {})})
        return True

    async def _post_action(self, uri: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        response = await self.http.post(uri, json_body=dict(body or {}))
        return response.data

    async def _emit(self, action: str, payload: Dict[str, Any]) -> None:
        await self.events.emit(f"{self.entity_name}.{action}", payload)

    async def _store(self, data: Mapping[str, Any]) -> None:
        await self.cache.set(self.entity_key(data["id"]), dict(data), self.find_ttl)
        for key in self._lookup_keys(data):
            await self._store_lookup(key, data)

    async def _remember_lookup(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Cache-aside read under a lookup key, indexed by the entity id it resolves to."""
        cached = await self.cache.get(key)
        if cached is not None:
            return cached
        data = await loader()
        if data is not None:
            await self._store_lookup(key, data)
        return data

    async def _store_lookup(self, key: str, data: Any) -> None:
        await self.cache.set(key, dict(data) if isinstance(data, Mapping) else data, self.find_ttl)
        entity_id = data.get("id") if isinstance(data, Mapping) else None
        if entity_id is None:
            return
        index_key = self.lookups_key(entity_id)
        indexed = await self.cache.get(index_key) or []
        if key not in indexed:
            await self.cache.set(index_key, [*indexed, key], self.find_ttl)

    async def _invalidate_queries(self) -> None:
        for segment in QUERY_SEGMENTS:
            await self.cache.delete_pattern(self.cache_key(segment, "*"))

    def _lookup_keys(self, data: Mapping[str, Any]) -> List[str]:
        return [self.lookup_key(name, data[name]) for name in self.lookup_fields if data.get(name)]

    def _event_payload(self, created: Mapping[str, Any], payload: Mapping[str, Any]) -> Dict[str, Any]:
        source = {**payload, **created}
        event = {"id": source.get("id")}
        for name in self.identifying_fields:
            if source.get(name) is not None:
                event[name] = source[name]
        return event

    def _payload(self, data: Union[T, Mapping[str, Any]]) -> Dict[str, Any]:
        if isinstance(data, BaseData):
            return data.to_payload()
        return {k: v for k, v in dict(data).items() if v is not None}

    def _to_entity(self, data: Any) -> Optional[T]:
        if not isinstance(data, dict):
            return None
        return self.entity_class.from_api(data)
