"""Daybook command line - journal notes, posts and the activity log."""

from __future__ import annotations

import argparse
import asyncio
import re
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Union

from .config import load_config, resolve_root
from .engine import NotesEngine
from .errors import DaybookError
from .logging import setup_logging
from .models import LOG_TYPES
from .summary import format_summary

DATE_ARGUMENT = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_date_or_offset(value: str) -> Union[date, int]:
    """Parse a ``YYYY-MM-DD`` date or an integer offset."""
    if DATE_ARGUMENT.fullmatch(value):
        year, month, day = (int(p) for p in value.split("-"))
        try:
            return date(year, month, day)
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"Invalid date {value!r}: {e}")
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid input: must be a date in YYYY-MM-DD format or a number. Received: {value}"
        )


def resolve_post_directory(value: Optional[str], root: Path) -> Optional[Path]:
    """Target directory for ``post``: ``@dir`` is under root, relative paths under cwd."""
    if not value:
        return None
    if value.startswith("@"):
        return root / value[1:]
    path = Path(value)
    return path if path.is_absolute() else Path.cwd() / path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daybook",
        description="Daybook - journal notes, posts and a structured activity log",
    )
    parser.add_argument(
        "--root",
        "-r",
        type=Path,
        help="Notes root directory (default: $DAYBOOK_ROOT or current directory)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Path to config file (default: auto-detect in root)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug output",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for kind in ("daily", "weekly"):
        p = sub.add_parser(kind, help=f"Create or locate the {kind} note")
        p.add_argument(
            "date_or_offset",
            nargs="?",
            type=parse_date_or_offset,
            help="Date (YYYY-MM-DD) or offset from today",
        )

    p = sub.add_parser("monthly", help="Create or locate this month's note")
    p.add_argument("offset", nargs="?", type=int, help="Months relative to this one")

    p = sub.add_parser("note", help="Create a new note with optional name")
    p.add_argument("name", nargs="?")

    p = sub.add_parser("post", help="Create a new timestamped post")
    p.add_argument(
        "path",
        nargs="?",
        help="Target directory: absolute, @dir under the root, or relative to cwd (default: posts)",
    )
    p.add_argument("--message", "-m", default="", help="Content of the post")

    p = sub.add_parser("list", help="Print non-empty files of a directory")
    p.add_argument("dir", nargs="?", default="")

    p = sub.add_parser("log", help="Append an entry to the activity log")
    p.add_argument("type", choices=LOG_TYPES)
    p.add_argument("duration", nargs="?", help="Duration such as 30m, 1h or 45s")
    when = p.add_mutually_exclusive_group()
    when.add_argument("--datetime", "-d", help="ISO 8601 datetime (default: now)")
    when.add_argument("--today", "-t", action="store_true", help="Record the entry at the start of today")
    p.add_argument("--message", "-m", help="Optional message")

    sub.add_parser("today", help="Show today's daily note and summarize today's log")

    sub.add_parser("serve", help="Run the MCP server over stdio")

    return parser


def run(engine: NotesEngine, args: argparse.Namespace) -> None:
    """Dispatch a parsed command."""
    command = args.command

    if command == "daily":
        print(engine.daily_note(args.date_or_offset))

    elif command == "weekly":
        print(engine.weekly_note(args.date_or_offset))

    elif command == "monthly":
        print(engine.monthly_note(args.offset))

    elif command == "note":
        print(engine.create_note(args.name))

    elif command == "post":
        print(engine.create_post(args.message, resolve_post_directory(args.path, engine.root)))

    elif command == "list":
        for name, content in engine.list_dir(args.dir):
            print(f"file: {name}")
            print()
            print(content)
            print()

    elif command == "log":
        datetime_input = date.today() if args.today else args.datetime
        entry = engine.log(args.type, args.duration, datetime_input, args.message)
        print(f"Logged {entry.type.value} at {entry.datetime.isoformat()}")

    elif command == "today":
        _, content, summary = engine.today()
        print("Today's Daily Note:")
        print(content)
        print()
        print("Today's Log Events Summary:")
        lines = format_summary(summary)
        if lines:
            for line in lines:
                print(line)
        else:
            print("No log events for today.")

    elif command == "serve":
        from .server import run_server

        asyncio.run(run_server(engine.config))


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(resolve_root(args.root), args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging("DEBUG" if args.verbose else config.log_level)

    try:
        run(NotesEngine(config), args)
    except (DaybookError, FileNotFoundError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
