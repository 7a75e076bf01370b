"""Per-type aggregation of a day's log entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .duration import format_duration, parse_duration
from .models import LogEntry


@dataclass
class TypeSummary:
    """Running totals for one log type."""
    count: int = 0
    total_duration_seconds: int = 0
    last_message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "total_duration_seconds": self.total_duration_seconds,
            "total_duration": format_duration(self.total_duration_seconds),
            "last_message": self.last_message,
        }


def summarize(entries: Iterable[LogEntry]) -> dict[str, TypeSummary]:
    """Group entries by type.

    Types appear in order of first occurrence. The last non-empty message
    of each type wins.
    """
    summary: dict[str, TypeSummary] = {}
    for entry in entries:
        item = summary.setdefault(entry.type.value, TypeSummary())
        item.count += 1
        item.total_duration_seconds += parse_duration(entry.duration)
        if entry.message:
            item.last_message = entry.message
    return summary


def format_summary(summary: dict[str, TypeSummary]) -> list[str]:
    """Render one line per type, e.g. ``workout: 2 (1h 30m good)``."""
    lines = []
    for log_type, item in summary.items():
        details = " ".join(
            part for part in (format_duration(item.total_duration_seconds), item.last_message) if part
        )
        lines.append(f"{log_type}: {item.count} ({details})" if details else f"{log_type}: {item.count}")
    return lines
