"""Append-only store of log entries, one JSON record per line.

Entries are grouped into one file per calendar month of their timestamp as
recorded, in its own UTC offset (``<logs_dir>/2024-01.jsonl``), so the file
an entry lands in never depends on the reader's timezone. Lines are only
ever appended.
"""

from __future__ import annotations

import json
from datetime import date, timedelta
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger

from .errors import LogStoreError, ValidationError
from .locking import locked_append
from .models import LogEntry

# UTC offsets span -12:00 to +14:00, so a recorded date and the local date
# of the same instant are at most this many days apart.
MAX_OFFSET_DAYS = 2


class LogStore:
    """Line-delimited JSON log files under a directory."""

    def __init__(self, logs_dir: Path):
        self.logs_dir = logs_dir

    def period_path(self, day: date) -> Path:
        """Path of the file holding entries recorded in ``day``'s month."""
        return self.logs_dir / f"{day.year:04d}-{day.month:02d}.jsonl"

    def period_paths_for(self, day: date) -> list[Path]:
        """Period files that may hold entries falling on local ``day``, oldest first."""
        window = range(-MAX_OFFSET_DAYS, MAX_OFFSET_DAYS + 1)
        return sorted({self.period_path(day + timedelta(days=n)) for n in window})

    def append(self, entry: LogEntry) -> Path:
        """Append an entry as a single line.

        Returns:
            Path of the period file written to
        """
        path = self.period_path(entry.datetime.date())
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with locked_append(path) as f:
            f.write(line + "\n")
        logger.debug(f"Appended {entry.type.value} entry to {path}")
        return path

    def iter_entries(self, path: Path) -> Iterator[LogEntry]:
        """Yield entries stored in ``path`` in file order.

        Raises:
            LogStoreError: If a line is not a valid record
        """
        if not path.exists():
            return
        with open(path, "r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    raise LogStoreError(f"Malformed log record: {e}", str(path), line_no) from e
                if not isinstance(data, dict):
                    raise LogStoreError("Log record is not an object", str(path), line_no)
                try:
                    yield LogEntry.from_dict(data)
                except ValidationError as e:
                    raise LogStoreError(str(e), str(path), line_no) from e

    def load_for_day(self, day: Optional[date] = None) -> list[LogEntry]:
        """Entries whose local date is ``day`` (default today), in file order."""
        day = day or date.today()
        return [
            e
            for path in self.period_paths_for(day)
            for e in self.iter_entries(path)
            if e.local_date == day
        ]
