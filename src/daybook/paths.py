"""Deterministic file paths for daily, weekly and monthly journal notes.

Layout under the root directory::

    journals/<year>/<month>/<day>.md         daily
    journals/<year>/<month>/week-of-<d>.md   weekly, d = day of that week's Monday
    journals/<year>/<month>/index.md         monthly

Month and day numbers are not zero-padded. Calendar fields come from the UTC
date so a late-evening timestamp doesn't drift into the next local day.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Union

from .errors import InvalidDateError
from .models import parse_timestamp

DateLike = Union[date, datetime, str]

DEFAULT_JOURNALS_DIR = "journals"


class NoteKind(Enum):
    """Granularity of a journal note."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def calendar_fields(value: DateLike) -> tuple[int, int, int]:
    """Split a date-like value into (year, month, day).

    Datetimes and timestamp strings give their UTC date; a naive value is
    read as local time first. Bare ``YYYY-MM-DD`` text is split as written.

    Raises:
        InvalidDateError: If a string's month or day is out of range
    """
    if isinstance(value, datetime):
        return _utc_fields(value)
    if isinstance(value, date):
        return value.year, value.month, value.day
    if isinstance(value, str):
        if len(value.strip()) > len("YYYY-MM-DD"):
            try:
                return _utc_fields(parse_timestamp(value))
            except ValueError:
                raise InvalidDateError(f"Invalid date: {value!r}") from None
        return _parse_date_portion(value)
    raise InvalidDateError(f"Unsupported date value: {value!r}")


def _utc_fields(value: datetime) -> tuple[int, int, int]:
    if value.tzinfo is None:
        value = value.astimezone()
    utc = value.astimezone(timezone.utc)
    return utc.year, utc.month, utc.day


def _parse_date_portion(text: str) -> tuple[int, int, int]:
    parts = text.strip().split("-")
    if len(parts) != 3:
        raise InvalidDateError(f"Invalid date: {text!r}")
    try:
        year, month, day = (int(p) for p in parts)
    except ValueError:
        raise InvalidDateError(f"Invalid date: {text!r}") from None
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Invalid month number: {month}")
    if not 1 <= day <= 31:
        raise InvalidDateError(f"Invalid day number: {day}")
    return year, month, day


def as_date(value: DateLike) -> date:
    """Convert a date-like value to a calendar date using UTC fields."""
    year, month, day = calendar_fields(value)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(f"Invalid date: {value!r} ({e})") from None


def week_start(d: date) -> date:
    """Monday on or before ``d``. Sunday belongs to the preceding Monday."""
    return d - timedelta(days=d.weekday())


def add_months(d: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month length."""
    index = d.month - 1 + months
    year, month = d.year + index // 12, index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def shift(kind: NoteKind, anchor: date, offset: int) -> date:
    """Move ``anchor`` by ``offset`` days, weeks or months depending on kind."""
    if kind is NoteKind.DAILY:
        return anchor + timedelta(days=offset)
    if kind is NoteKind.WEEKLY:
        return anchor + timedelta(days=offset * 7)
    return add_months(anchor, offset)


def journal_path(
    kind: Union[NoteKind, str],
    value: DateLike,
    root: Path,
    journals_dir: str = DEFAULT_JOURNALS_DIR,
) -> Path:
    """Canonical path of the journal note of ``kind`` for ``value``.

    Args:
        kind: daily, weekly or monthly
        value: Date, datetime or ISO date string
        root: Root directory of the notes tree
        journals_dir: Journals directory name under root

    Raises:
        InvalidDateError: If the date has an out-of-range month or day
    """
    kind = NoteKind(kind)
    year, month, day = calendar_fields(value)
    month_dir = Path(root) / journals_dir / str(year) / str(month)

    if kind is NoteKind.DAILY:
        return month_dir / f"{day}.md"
    if kind is NoteKind.WEEKLY:
        monday = week_start(as_date(value))
        return month_dir / f"week-of-{monday.day}.md"
    return month_dir / "index.md"
