"""Listing report model.

This module defines what the list and clean commands show for a set of
resolved patterns, independent of how it is rendered.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from clir.rules.pattern import ExpandedPattern


@dataclass(frozen=True, slots=True)
class PatternReport:
    """One row of the report.

    Attributes:
        pattern: Normalized pattern of the rule.
        size: De-duplicated size in bytes.
        file_count: Number of matched files owned by the rule.
        dir_count: Number of matched directories owned by the rule.
    """

    pattern: str
    size: int
    file_count: int
    dir_count: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "pattern": self.pattern,
            "size": self.size,
            "file_count": self.file_count,
            "dir_count": self.dir_count,
        }


@dataclass(frozen=True, slots=True)
class ReportTotals:
    """Sums over every row of a report."""

    size: int = 0
    file_count: int = 0
    dir_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "size": self.size,
            "file_count": self.file_count,
            "dir_count": self.dir_count,
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Rows ascending by size plus their totals."""

    entries: tuple[PatternReport, ...]
    totals: ReportTotals

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "totals": self.totals.to_dict(),
        }


def build_report(expanded: Sequence[ExpandedPattern]) -> Report:
    """Build the report for a listing.

    Patterns without any remaining path are left out. Rows are ordered
    ascending by size, ties by pattern.

    Args:
        expanded: Resolved patterns, usually the result of ``RuleSet.list``.

    Returns:
        The report.
    """
    entries = sorted(
        (
            PatternReport(
                pattern=pattern.pattern,
                size=pattern.size or 0,
                file_count=pattern.file_count,
                dir_count=pattern.dir_count,
            )
            for pattern in expanded
            if not pattern.is_empty
        ),
        key=lambda entry: (entry.size, entry.pattern),
    )
    totals = ReportTotals(
        size=sum(entry.size for entry in entries),
        file_count=sum(entry.file_count for entry in entries),
        dir_count=sum(entry.dir_count for entry in entries),
    )
    return Report(entries=tuple(entries), totals=totals)
