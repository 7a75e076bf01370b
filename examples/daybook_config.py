"""Daybook Configuration - Python Example

Copy to your notes root as daybook_config.py.

Convention:
- CONFIG dict for static configuration (same structure as daybook.toml)
- Functions named custom_tool_* become MCP tools. The first parameter receives
  the NotesEngine; the remaining parameters become the tool's input schema,
  typed from their annotations and required when they have no default.
"""

from datetime import date, timedelta

# =============================================================================
# Static Configuration (same structure as TOML)
# =============================================================================

CONFIG = {
    "directories": {
        "journals": "journals",
        "templates": "templates",
        "logs": "logs",
        "notes": "notes",
        "posts": "posts",
    },
    "journal": {
        # Full templates every day, including weekends
        "weekend_fallback": False,
        "weekend_template": "# {{date}}",
    },
    "logging": {
        "level": "INFO",
    },
}


# =============================================================================
# Custom Tools - Exposed as additional MCP tools
# =============================================================================

def custom_tool_streak(engine, log_type: str = "meditated", max_days: int = 365) -> dict:
    """Count consecutive days, ending today, with at least one entry of a type."""
    streak = 0
    day = date.today()
    while streak < max_days:
        if not any(e.type.value == log_type for e in engine.logs_for_day(day)):
            break
        streak += 1
        day -= timedelta(days=1)

    return {"success": True, "type": log_type, "streak": streak}


def custom_tool_week_totals(engine, days: int = 7) -> dict:
    """Total logged duration per type over the last few days (default: a week)."""
    totals: dict[str, int] = {}
    for offset in range(days):
        day = date.today() - timedelta(days=offset)
        for log_type, item in engine.summary_for_day(day).items():
            totals[log_type] = totals.get(log_type, 0) + item.total_duration_seconds
    return {"success": True, "total_duration_seconds": totals}
