"""Analytics entities."""

from .report import REPORT_GRANULARITIES, REPORT_PERIODS, ReportData

__all__ = ["REPORT_GRANULARITIES", "REPORT_PERIODS", "ReportData"]
