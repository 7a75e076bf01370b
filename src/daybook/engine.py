"""Core notes engine - journal provisioning, notes, posts and the activity log."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .config import DaybookConfig
from .locking import create_if_absent
from .logstore import LogStore
from .models import DatetimeInput, LogEntry, LogType, create_log_entry, local_now
from .paths import DateLike, NoteKind, as_date, journal_path, shift, week_start
from .summary import TypeSummary, summarize
from .templates import TemplateLibrary, long_date, replace_date

POST_FILENAME_FORMAT = "%Y-%m-%d_%H-%M-%S_%z"

TEMPLATE_NAMES = {
    NoteKind.DAILY: "daily-note-template",
    NoteKind.WEEKLY: "weekly-note-template",
    NoteKind.MONTHLY: "monthly-note-template",
}


def resolve_anchor(
    kind: Union[NoteKind, str],
    date_value: Optional[DateLike] = None,
    offset: Optional[int] = None,
    today: Optional[date] = None,
) -> date:
    """Pick the anchor date for a journal note.

    An explicit date wins; otherwise ``offset`` shifts today by days, weeks
    or months according to ``kind``; otherwise today.
    """
    kind = NoteKind(kind)
    if date_value is not None:
        return as_date(date_value)
    today = today or date.today()
    if offset is not None:
        return shift(kind, today, offset)
    return today


def note_label(kind: NoteKind, anchor: date) -> str:
    """Text substituted for ``{{date}}`` in a newly created journal note."""
    if kind is NoteKind.DAILY:
        return long_date(anchor)
    if kind is NoteKind.WEEKLY:
        return "Week of " + long_date(anchor)
    return anchor.strftime("%B %Y")


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5


class NotesEngine:
    """Engine managing journal notes, free notes, posts and logs under one root."""

    def __init__(self, config: DaybookConfig):
        self.config = config
        self.templates = TemplateLibrary(config.get_templates_path())
        self.log_store = LogStore(config.get_logs_path())

    @property
    def root(self) -> Path:
        return self.config.root

    def _write_new(self, path: Path, content: str) -> Path:
        """Create ``path`` from template content unless it already exists."""
        if path.exists():
            return path
        if create_if_absent(path, self.templates.expand(content)):
            logger.info(f"Created {path}")
        return path

    # ========== Journal Notes ==========

    def journal_path(self, kind: Union[NoteKind, str], value: DateLike) -> Path:
        """Canonical path for a journal note, without creating it."""
        return journal_path(kind, value, self.root, self.config.journals_dir)

    def template_for(self, kind: NoteKind, anchor: date) -> str:
        """Select the template text for a new note.

        Raises:
            TemplateNotFoundError: If the kind's template is missing on a weekday
        """
        if self.config.weekend_fallback and is_weekend(anchor):
            return self.config.weekend_template
        return self.templates.load(TEMPLATE_NAMES[kind])

    def get_or_create_journal_note(
        self,
        kind: Union[NoteKind, str],
        date_value: Optional[DateLike] = None,
        offset: Optional[int] = None,
    ) -> Path:
        """Return the path of a journal note, creating it if absent.

        Existing notes are returned untouched. New notes are rendered from
        ``<kind>-note-template.md`` (or the weekend template on Saturday and
        Sunday) with ``{{date}}`` set to a kind-specific label.

        Args:
            kind: daily, weekly or monthly
            date_value: Explicit date (takes precedence over offset)
            offset: Days, weeks or months relative to today

        Returns:
            Path of the note

        Raises:
            TemplateNotFoundError: If a weekday note's template is missing
            InvalidDateError: If the date has an out-of-range month or day
        """
        kind = NoteKind(kind)
        anchor = resolve_anchor(kind, date_value, offset)
        path = self.journal_path(kind, anchor)
        if path.exists():
            return path

        if kind is NoteKind.WEEKLY:
            anchor = week_start(anchor)

        content = replace_date(self.template_for(kind, anchor), note_label(kind, anchor))
        return self._write_new(path, content)

    def daily_note(self, date_or_offset: Union[DateLike, int, None] = None) -> Path:
        return self.get_or_create_journal_note(NoteKind.DAILY, *_split_date_or_offset(date_or_offset))

    def weekly_note(self, date_or_offset: Union[DateLike, int, None] = None) -> Path:
        return self.get_or_create_journal_note(NoteKind.WEEKLY, *_split_date_or_offset(date_or_offset))

    def monthly_note(self, date_or_offset: Union[DateLike, int, None] = None) -> Path:
        return self.get_or_create_journal_note(NoteKind.MONTHLY, *_split_date_or_offset(date_or_offset))

    # ========== Notes and Posts ==========

    def create_note(self, name: Optional[str] = None) -> Path:
        """Create an empty note under notes/, named or timestamped."""
        filename = f"{name}.md" if name else _post_filename(local_now())
        return self._write_new(self.config.get_notes_path() / filename, "")

    def create_post(self, content: str = "", directory: Optional[Path] = None) -> Path:
        """Create a timestamped post, expanding templates in ``content``."""
        directory = directory or self.config.get_posts_path()
        return self._write_new(Path(directory) / _post_filename(local_now()), content)

    def list_dir(self, subdir: str = "") -> list[tuple[str, str]]:
        """Return (name, content) of non-empty files in a directory, newest name first."""
        directory = self.root / subdir
        results = []
        for path in sorted(directory.iterdir(), reverse=True):
            if not path.is_file() or path.name.startswith("."):
                continue
            content = path.read_text(encoding="utf-8")
            if content:
                results.append((path.name, content))
        return results

    # ========== Log ==========

    def log(
        self,
        log_type: Union[LogType, str],
        duration: Optional[str] = None,
        datetime_input: DatetimeInput = None,
        message: Optional[str] = None,
    ) -> LogEntry:
        """Validate and append a log entry.

        Raises:
            ValidationError: If any field is invalid; nothing is written
        """
        entry = create_log_entry(log_type, datetime_input, duration=duration, message=message)
        self.log_store.append(entry)
        return entry

    def logs_for_day(self, day: Optional[date] = None) -> list[LogEntry]:
        return self.log_store.load_for_day(day)

    def summary_for_day(self, day: Optional[date] = None) -> dict[str, TypeSummary]:
        return summarize(self.log_store.load_for_day(day))

    def today(self) -> tuple[Path, str, dict[str, TypeSummary]]:
        """Today's daily note (created if needed), its content, and the log summary."""
        path = self.daily_note()
        return path, path.read_text(encoding="utf-8"), self.summary_for_day(date.today())


def _split_date_or_offset(value: Union[DateLike, int, None]) -> tuple[Optional[DateLike], Optional[int]]:
    if isinstance(value, bool):
        raise TypeError("Expected a date or an integer offset")
    if isinstance(value, int):
        return None, value
    return value, None


def _post_filename(now: datetime) -> str:
    return now.strftime(POST_FILENAME_FORMAT) + ".md"
