"""Analytics service."""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from ....core.exceptions import ValidationError
from ....core.service import RepositoryService
from ..entities import REPORT_GRANULARITIES, REPORT_PERIODS, ReportData
from ..repositories import REPORT_ENDPOINTS, AnalyticsRepository


def _parse_date(value: Any) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class AnalyticsService(RepositoryService):
    service_name = "analytics"
    repository: AnalyticsRepository

    def normalize_period(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Validate the reporting window.

        ``period`` defaults to ``30d``. A ``custom`` period needs both
        ``start_date`` and ``end_date`` with the start not after the end.
        """
        query = {"period": "30d", **dict(params or {})}
        errors: Dict[str, list] = {}

        if query["period"] not in REPORT_PERIODS:
            errors["period"] = [f"must be one of: {', '.join(REPORT_PERIODS)}"]
        if query.get("granularity") is not None and query["granularity"] not in REPORT_GRANULARITIES:
            errors["granularity"] = [f"must be one of: {', '.join(REPORT_GRANULARITIES)}"]

        if query["period"] == "custom":
            start = _parse_date(query.get("start_date")) if query.get("start_date") else None
            end = _parse_date(query.get("end_date")) if query.get("end_date") else None
            if start is None:
                errors["start_date"] = ["a valid start_date is required for a custom period"]
            if end is None:
                errors["end_date"] = ["a valid end_date is required for a custom period"]
            if start and end and start > end:
                errors["start_date"] = ["start_date must not be after end_date"]

        if errors:
            raise ValidationError("Invalid analytics period", errors=errors)
        if self.settings.organization_id:
            query.setdefault("organization_id", self.settings.organization_id)
        return query

    async def report(self, name: str, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        if name not in REPORT_ENDPOINTS:
            raise ValidationError(f"Unknown report: {name}", errors={"report": [f"must be one of: {', '.join(REPORT_ENDPOINTS)}"]})
        return await self.execute_with_metrics(name, self.repository.get_report, name, self.normalize_period(params))

    async def dashboard(self, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        return await self.report("dashboard", params)

    async def conversion_funnel(self, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        return await self.report("conversion_funnel", params)

    async def revenue_report(self, params: Optional[Mapping[str, Any]] = None) -> ReportData:
        return await self.report("revenue", params)

    async def custom_report(self, definition: Mapping[str, Any]) -> ReportData:
        if not definition.get("metrics"):
            raise ValidationError("Custom report needs metrics", errors={"metrics": ["at least one metric is required"]})
        query = self.normalize_period(definition)
        return await self.execute_with_metrics("custom_report", self.repository.custom_report, query)

    async def record_event(self, name: str, properties: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.repository.record_event({"name": name, "properties": dict(properties or {})})

    async def refresh(self) -> int:
        """Drop cached reports so the next read hits the API."""
        return await self.repository.clear_reports()
