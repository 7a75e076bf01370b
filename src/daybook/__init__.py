"""Daybook - journal notes from templates and an append-only activity log."""

from .config import DaybookConfig, load_config
from .engine import NotesEngine
from .errors import (
    CyclicIncludeError,
    DaybookError,
    InvalidDateError,
    LogStoreError,
    TemplateNotFoundError,
    ValidationError,
)
from .models import LogEntry, LogType, create_log_entry
from .paths import NoteKind, journal_path

__version__ = "0.1.0"

__all__ = [
    "CyclicIncludeError",
    "DaybookConfig",
    "DaybookError",
    "InvalidDateError",
    "LogEntry",
    "LogStoreError",
    "LogType",
    "NoteKind",
    "NotesEngine",
    "TemplateNotFoundError",
    "ValidationError",
    "create_log_entry",
    "journal_path",
    "load_config",
]
