"""Data models for clir.

This module exports the report structures handed to the display layer.
"""

from clir.models.report import PatternReport, Report, ReportTotals, build_report

__all__ = [
    "PatternReport",
    "Report",
    "ReportTotals",
    "build_report",
]
