"""Shared pytest fixtures for daybook tests."""

import sys
import tempfile
from pathlib import Path

import pytest
from loguru import logger

from daybook.config import DaybookConfig
from daybook.engine import NotesEngine


DAILY_TEMPLATE = "# {{date}}\n\n## Tasks\n{{> tasks}}\n"
WEEKLY_TEMPLATE = "# {{date}}\n\n## Goals\n"
MONTHLY_TEMPLATE = "# {{date}}\n\n## Review\n"
TASKS_TEMPLATE = "- [ ] stretch\n- [ ] read"


@pytest.fixture
def temp_root():
    """Create a temporary notes root directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_root):
    """Create a test configuration."""
    return DaybookConfig(root=temp_root)


@pytest.fixture
def engine(config):
    """Create a test engine with no templates on disk."""
    return NotesEngine(config)


@pytest.fixture
def templates_dir(temp_root):
    """Write the standard kind templates plus an include."""
    directory = temp_root / "templates"
    directory.mkdir()
    (directory / "daily-note-template.md").write_text(DAILY_TEMPLATE, encoding="utf-8")
    (directory / "weekly-note-template.md").write_text(WEEKLY_TEMPLATE, encoding="utf-8")
    (directory / "monthly-note-template.md").write_text(MONTHLY_TEMPLATE, encoding="utf-8")
    (directory / "tasks.md").write_text(TASKS_TEMPLATE, encoding="utf-8")
    return directory


@pytest.fixture
def templated_engine(config, templates_dir):
    """Create a test engine with templates on disk."""
    return NotesEngine(config)


@pytest.fixture
def error_messages():
    """Collect messages logged at ERROR level or above."""
    messages = []
    handler_id = logger.add(messages.append, level="ERROR", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def restore_logger():
    """Entry points reconfigure loguru; put the default sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)
