"""Template expansion for notes.

Two directives are understood:

- ``{{date}}`` is replaced with today's date in long form. Only the first
  occurrence in each piece of text is replaced.
- ``{{> name}}`` splices in the named template, expanded recursively. The
  whitespace before the directive is applied to every spliced line, so
  includes inside indented lists stay indented.

Unknown includes are left as-is.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .errors import CyclicIncludeError, TemplateNotFoundError

DATE_TOKEN = "{{date}}"
INCLUDE_PATTERN = re.compile(r"([ \t]*)\{\{>\s*(.+?)\}\}")
LONG_DATE_FORMAT = "%a %b %d %Y"

Resolver = Callable[[str], Optional[str]]


def long_date(d: date) -> str:
    """Render a date in long form, e.g. ``Mon Jan 15 2024``."""
    return d.strftime(LONG_DATE_FORMAT)


def replace_date(content: str, value: str) -> str:
    """Replace the first ``{{date}}`` token in ``content`` with ``value``."""
    return content.replace(DATE_TOKEN, value, 1)


def expand(content: str, resolve: Resolver, today: Optional[date] = None) -> str:
    """Expand ``{{date}}`` and ``{{> name}}`` directives in ``content``.

    Args:
        content: Template text
        resolve: Returns the text of a named template, or None if unknown
        today: Date used for ``{{date}}`` (defaults to today)

    Returns:
        Expanded text

    Raises:
        CyclicIncludeError: If a template includes itself, directly or not
    """
    return _expand(content, resolve, today or date.today(), [])


def _expand(content: str, resolve: Resolver, today: date, chain: list[str]) -> str:
    content = replace_date(content, long_date(today))

    def splice(match: re.Match) -> str:
        whitespace, name = match.group(1), match.group(2).strip()
        included = resolve(name)
        if included is None:
            return match.group(0)
        if name in chain:
            raise CyclicIncludeError(chain + [name])
        expanded = _expand(included, resolve, today, chain + [name])
        return "\n".join(whitespace + line for line in expanded.split("\n"))

    return INCLUDE_PATTERN.sub(splice, content)


class TemplateLibrary:
    """Named templates stored as ``<name>.md`` files in a directory.

    Each lookup re-reads the file so edits are picked up immediately.
    """

    def __init__(self, templates_dir: Path):
        self.templates_dir = templates_dir

    def path_for(self, name: str) -> Path:
        return self.templates_dir / f"{name}.md"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def load(self, name: str) -> str:
        """Read a template.

        Raises:
            TemplateNotFoundError: If no such template file exists
        """
        path = self.path_for(name)
        if not path.is_file():
            raise TemplateNotFoundError(f"Template not found: {path}")
        return path.read_text(encoding="utf-8")

    def resolve(self, name: str) -> Optional[str]:
        """Read a template, or return None if it doesn't exist."""
        path = self.path_for(name)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def list_names(self) -> list[str]:
        """List available template names."""
        if not self.templates_dir.is_dir():
            return []
        return sorted(p.stem for p in self.templates_dir.glob("*.md"))

    def expand(self, content: str, today: Optional[date] = None) -> str:
        """Expand ``content`` using templates from this library."""
        return expand(content, self.resolve, today=today)
