"""Data models for structured log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional, Union

from loguru import logger

from .duration import validate_duration
from .errors import ValidationError


class LogType(Enum):
    """Category of a log entry. ``custom`` is the catch-all."""
    MEDITATED = "meditated"
    ANKIED = "ankied"
    EYE_PATCH = "eye-patch"
    WORKOUT = "workout"
    CUSTOM = "custom"


LOG_TYPES = [t.value for t in LogType]

DatetimeInput = Union[datetime, date, str, None]


def local_now() -> datetime:
    """Get current local time with timezone info."""
    return datetime.now().astimezone()


def utc_now() -> datetime:
    """Get current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Format datetime as ISO 8601 with timezone."""
    return dt.isoformat(timespec="seconds")


def parse_timestamp(s: str) -> datetime:
    """Parse ISO 8601 timestamp string.

    A trailing ``Z`` is accepted. Naive results are interpreted as local time.
    """
    text = s.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def validate_datetime(value: Optional[str]) -> bool:
    """Check that a datetime string is ISO 8601 parseable. Absent is valid."""
    if value:
        try:
            parse_timestamp(value)
        except ValueError:
            logger.error(
                f"Invalid datetime format {value!r}. Use ISO 8601 format "
                "(e.g., '2023-04-15T14:30:00-04:00')"
            )
            return False
    return True


def coerce_datetime(value: DatetimeInput) -> datetime:
    """Normalize accepted datetime inputs to an aware datetime."""
    if value is None:
        return local_now()
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.astimezone()
    if isinstance(value, date):
        return datetime.combine(value, time()).astimezone()
    if isinstance(value, str):
        if not validate_datetime(value):
            raise ValidationError("datetime", f"not an ISO 8601 timestamp: {value!r}")
        return parse_timestamp(value)
    raise ValidationError("datetime", f"unsupported type {type(value).__name__}")


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record. Immutable once created."""
    type: LogType
    datetime: datetime
    duration: Optional[str] = None
    message: Optional[str] = None

    @property
    def local_date(self) -> date:
        """Calendar day of the entry in local time."""
        return self.datetime.astimezone().date()

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to the stored record shape, omitting absent fields."""
        record: dict[str, Any] = {
            "type": self.type.value,
            "datetime": format_timestamp(self.datetime),
        }
        if self.duration:
            record["duration"] = self.duration
        if self.message:
            record["message"] = self.message
        return record

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        """Rebuild an entry from a stored record, validating every field.

        Unlike ``create_log_entry``, a stored record must carry its timestamp.
        """
        if not data.get("datetime"):
            raise ValidationError("datetime", "missing from stored record")
        return create_log_entry(
            data.get("type"),
            data.get("datetime"),
            duration=data.get("duration"),
            message=data.get("message"),
        )


def create_log_entry(
    log_type: Union[LogType, str, None],
    datetime_input: DatetimeInput = None,
    duration: Optional[str] = None,
    message: Optional[str] = None,
) -> LogEntry:
    """Validate inputs and build a LogEntry.

    Args:
        log_type: A LogType or its string value
        datetime_input: Timestamp, date, ISO string, or None for now
        duration: Optional duration token (``30m``, ``1h``, ``45s``)
        message: Optional free-text annotation

    Returns:
        The validated LogEntry

    Raises:
        ValidationError: Naming the first field that failed
    """
    try:
        entry_type = log_type if isinstance(log_type, LogType) else LogType(log_type)
    except ValueError:
        raise ValidationError("type", f"must be one of {LOG_TYPES}, got {log_type!r}")

    if duration is not None and not isinstance(duration, str):
        raise ValidationError("duration", f"expected a string token, got {duration!r}")
    if not validate_duration(duration):
        raise ValidationError("duration", f"expected <number><h|m|s>, got {duration!r}")

    if message is not None and not isinstance(message, str):
        raise ValidationError("message", f"expected a string, got {message!r}")

    return LogEntry(
        type=entry_type,
        datetime=coerce_datetime(datetime_input),
        duration=duration or None,
        message=message or None,
    )
