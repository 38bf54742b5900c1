"""Analytics report record."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ....core.data import BaseData
from ....core.formatting import format_currency, percentage, to_float

REPORT_PERIODS = ["today", "yesterday", "7d", "30d", "90d", "12m", "custom"]
REPORT_GRANULARITIES = ["hour", "day", "week", "month"]


@dataclass
class ReportData(BaseData):
    """Aggregated figures for one report over one period."""

    RULES = {
        "report_type": ["required", "string"],
        "period": [["in", REPORT_PERIODS]],
        "start_date": ["date"],
        "end_date": ["date"],
        "currency": ["string", ["min", 3], ["max", 3]],
        "metrics": ["dict"],
        "series": ["list"],
        "breakdown": ["array"],
    }

    report_type: Optional[str] = None
    period: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    currency: Optional[str] = None
    metrics: Optional[Dict[str, Any]] = None
    series: Optional[List[Any]] = None
    breakdown: Optional[Any] = None

    def metric(self, name: str, default: Any = None) -> Any:
        return (self.metrics or {}).get(name, default)

    def get_conversion_rate(self) -> float:
        """Conversions over visitors as a percentage, unless the API sent one."""
        if self.metric("conversion_rate") is not None:
            return round(to_float(self.metric("conversion_rate")), 2)
        return percentage(self.metric("conversions", 0), self.metric("visitors", 0))

    def get_revenue(self) -> float:
        return to_float(self.metric("revenue", 0))

    def get_formatted_revenue(self) -> str:
        return format_currency(self.get_revenue(), self.currency or "BRL")

    def get_average_order_value(self) -> float:
        orders = to_float(self.metric("orders", 0))
        if orders <= 0:
            return 0.0
        return round(self.get_revenue() / orders, 2)
