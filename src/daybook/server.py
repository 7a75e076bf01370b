"""Daybook MCP server - the notes and log tools over stdio.

Tool schemas and dispatch live in ``daybook.tools``; this module only binds
them to an MCP ``Server``. Start it with ``daybook-mcp`` or ``daybook serve``.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Optional

# MCP imports are optional - only needed when running the server
try:
    from mcp.server import Server  # pragma: no cover
    from mcp.server.stdio import stdio_server  # pragma: no cover
    from mcp.types import Tool, TextContent  # pragma: no cover
    HAS_MCP = True  # pragma: no cover
except ImportError:
    HAS_MCP = False
    Server = None  # type: ignore
    Tool = None  # type: ignore
    TextContent = None  # type: ignore

from loguru import logger

from .config import DaybookConfig
from .engine import NotesEngine
from .tools import execute_tool, make_tools

MISSING_MCP = "MCP package not installed. Install with: pip install daybook[mcp]"


def _require_mcp() -> None:
    if not HAS_MCP:
        raise ImportError(MISSING_MCP)


def _as_text(result: dict[str, Any]) -> list:
    return [TextContent(type="text", text=json.dumps(result, indent=2, default=str))]


def create_server(config: DaybookConfig) -> "Server":
    """Build an MCP server exposing the daybook tools for ``config.root``.

    Custom tools from ``daybook_config.py`` are listed next to the built-in
    ones, with input schemas derived from their signatures.

    Raises:
        ImportError: If MCP package is not installed
    """
    _require_mcp()

    engine = NotesEngine(config)
    tool_defs = make_tools(engine, config.custom_tools)
    server = Server("daybook")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [Tool(**definition) for definition in tool_defs.values()]

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        result = await execute_tool(engine, name, arguments or {}, config.custom_tools)
        if not result.get("success", True):
            logger.warning(f"Tool {name} failed: {result.get('error')}")
        return _as_text(result)

    logger.debug(f"MCP server ready with {len(tool_defs)} tools for {config.root}")
    return server


async def run_server(config: DaybookConfig) -> None:
    """Serve ``config``'s notes root over stdio until the client disconnects."""
    _require_mcp()

    server = create_server(config)  # pragma: no cover
    async with stdio_server() as (read_stream, write_stream):  # pragma: no cover
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: Optional[list[str]] = None) -> None:
    """``daybook-mcp`` entry point: ``daybook [--root R] [--config C] serve``."""
    from .cli import main as cli_main

    args = sys.argv[1:] if argv is None else argv
    cli_main([*args, "serve"])


if __name__ == "__main__":  # pragma: no cover
    main()
