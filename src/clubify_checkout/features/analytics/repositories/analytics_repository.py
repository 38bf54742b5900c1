"""Read-only analytics reports.

Every report is a GET cached under ``analytics:report:{name}:{hash}`` where
the hash covers the query parameters.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ....core.data import extract_entity
from ....core.repository import CacheAsideRepository, hash_params
from ..entities import ReportData

logger = logging.getLogger(__name__)

REPORT_ENDPOINTS = {
    "dashboard": "analytics/dashboard/executive",
    "sales_metrics": "analytics/sales/metrics",
    "conversion_funnel": "analytics/funnel",
    "revenue": "analytics/revenue",
    "top_products": "analytics/products/top",
    "customer_segments": "analytics/customers/segments",
    "customer_ltv": "analytics/customers/ltv",
    "retention": "analytics/customers/retention",
    "cohort": "analytics/cohort",
    "performance": "analytics/performance",
    "cart_abandonment": "analytics/cart/abandonment",
    "comparison": "analytics/comparison",
}


class AnalyticsRepository(CacheAsideRepository[ReportData]):
    endpoint = "analytics"
    resource_name = "analytics"
    entity_name = "Analytics"
    entity_class = ReportData
    identifying_fields = ("report_type",)

    @property
    def report_ttl(self) -> int:
        return self.settings.cache_ttl_stats

    def report_key(self, name: str, params: Mapping[str, Any]) -> str:
        return self.cache_key("report", name, hash_params(dict(params)))

    async def get_report(self, name: str, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        if name not in REPORT_ENDPOINTS:
            raise ValueError(f"Unknown analytics report: {name}")
        query = dict(params or {})
        data = await self._cached_fetch(self.report_key(name, query), self.report_ttl, REPORT_ENDPOINTS[name], params=query)
        body = extract_entity(data) or {}
        return ReportData.from_api({
            "report_type": name,
            "period": query.get("period"),
            "start_date": query.get("start_date"),
            "end_date": query.get("end_date"),
            "metrics": body.get("metrics", body),
            "series": body.get("series"),
            "breakdown": body.get("breakdown"),
            "currency": body.get("currency"),
        })

    async def dashboard(self, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        return await self.get_report("dashboard", params)

    async def conversion_funnel(self, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        return await self.get_report("conversion_funnel", params)

    async def revenue_report(self, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        return await self.get_report("revenue", params)

    async def custom_report(self, definition: Mapping[str, Any]) -> ReportData:
        """POST a report definition; the result is cached by definition hash."""
        body = dict(definition)

        async def load():
            return await self._post_action(f"{self.endpoint}/reports/custom", body)

        data = await self.cache.remember(self.report_key("custom", body), self.report_ttl, load)
        result = extract_entity(data) or {}
        return ReportData.from_api({"report_type": "custom", "metrics": result.get("metrics", result)})

    async def record_event(self, event: Mapping[str, Any]) -> Dict[str, Any]:
        data = await self._post_action(f"{self.endpoint}/events", event)
        return extract_entity(data) or {}

    async def clear_reports(self) -> int:
        return await self.cache.delete_pattern(self.cache_key("report", "*"))
