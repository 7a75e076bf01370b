"""Compact duration tokens such as ``30m``, ``1h`` or ``45s``.

``parse_duration`` is lenient and returns 0 for anything it cannot read;
``validate_duration`` is the strict gate that must run before a token is
trusted or persisted.
"""

from __future__ import annotations

import re
from typing import Optional

from loguru import logger

DURATION_PATTERN = re.compile(r"(\d+)([hms])", re.ASCII)

UNIT_SECONDS = {
    "h": 60 * 60,
    "m": 60,
    "s": 1,
}


def parse_duration(token: Optional[str]) -> int:
    """Convert a duration token to seconds, or 0 if it doesn't match."""
    if not token:
        return 0
    match = DURATION_PATTERN.fullmatch(token)
    if not match:
        return 0
    value, unit = match.groups()
    return int(value) * UNIT_SECONDS[unit]


def format_duration(seconds: int) -> str:
    """Render seconds as space-separated ``h``/``m``/``s`` components.

    Zero components are skipped, so ``5400`` becomes ``"1h 30m"`` and ``0``
    becomes an empty string.
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    remaining = seconds % 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if remaining > 0:
        parts.append(f"{remaining}s")
    return " ".join(parts)


def validate_duration(token: Optional[str]) -> bool:
    """Check a duration token. Absent tokens are valid."""
    if token and not DURATION_PATTERN.fullmatch(token):
        logger.error(
            f"Invalid duration format {token!r}. Use a number followed by "
            "'h' (hours), 'm' (minutes), or 's' (seconds)."
        )
        return False
    return True
