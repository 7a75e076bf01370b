"""Exception hierarchy for daybook operations."""

from __future__ import annotations

from typing import Optional


class DaybookError(Exception):
    """Base exception for daybook operations."""
    pass


class ValidationError(DaybookError, ValueError):
    """Raised when a log entry field fails validation. Nothing is persisted."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid {field}: {message}")


class InvalidDateError(DaybookError, ValueError):
    """Raised when a month or day falls outside the calendar range."""
    pass


class TemplateNotFoundError(DaybookError, FileNotFoundError):
    """Raised when a required template file is absent."""
    pass


class CyclicIncludeError(DaybookError):
    """Raised when a template include chain refers back to itself."""

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(f"Cyclic template include: {' -> '.join(self.chain)}")


class LogStoreError(DaybookError):
    """Raised when a stored log record cannot be read back."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        self.path = path
        self.line = line
        location = f" ({path}:{line})" if path and line else ""
        super().__init__(f"{message}{location}")
