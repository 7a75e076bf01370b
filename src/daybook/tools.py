"""MCP tool definitions wrapping the notes engine."""

from __future__ import annotations

import asyncio
import inspect
from datetime import date
from typing import Any, Callable, Optional

from loguru import logger

from .engine import NotesEngine
from .errors import (
    CyclicIncludeError,
    DaybookError,
    InvalidDateError,
    LogStoreError,
    TemplateNotFoundError,
    ValidationError,
)
from .models import LOG_TYPES
from .paths import as_date
from .summary import format_summary

KINDS = ["daily", "weekly", "monthly"]

CustomTools = dict[str, Callable[..., Any]]

JSON_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    list: "array",
    dict: "object",
}
JSON_TYPES_BY_NAME = {t.__name__: name for t, name in JSON_TYPES.items()}


def _json_type(annotation: Any) -> str:
    if isinstance(annotation, str):
        return JSON_TYPES_BY_NAME.get(annotation, "string")
    return JSON_TYPES.get(annotation, "string")


def custom_tool_definition(name: str, func: Callable[..., Any]) -> dict:
    """Build an MCP tool definition from a ``custom_tool_*`` function.

    The first parameter receives the engine. Every other parameter becomes a
    property of the input schema, typed from its annotation and required
    when it has no default.
    """
    doc = inspect.getdoc(func) or f"Custom tool: {name}"
    properties: dict[str, dict] = {}
    required = []
    for param in list(inspect.signature(func).parameters.values())[1:]:
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        prop = {"type": _json_type(param.annotation)}
        if param.default is param.empty:
            required.append(param.name)
        elif param.default is not None:
            prop["default"] = param.default
        properties[param.name] = prop

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return {
        "name": name,
        "description": doc.split("\n")[0],
        "inputSchema": schema,
    }


async def _run_custom_tool(
    engine: NotesEngine,
    name: str,
    func: Callable[..., Any],
    arguments: dict[str, Any],
) -> dict[str, Any]:
    try:
        inspect.signature(func).bind(engine, **arguments)
    except TypeError as e:
        raise ValidationError("arguments", f"{name}: {e}") from None

    try:
        result = func(engine, **arguments)
        if asyncio.iscoroutine(result):
            result = await result
    except DaybookError:
        raise
    except Exception as e:
        logger.exception(f"Custom tool {name} failed")
        return {
            "success": False,
            "error": str(e),
            "error_type": "custom_tool_error",
        }
    return result


def make_tools(engine: NotesEngine, custom_tools: Optional[CustomTools] = None) -> dict[str, dict]:
    """Create MCP tool definitions for the notes engine.

    Args:
        engine: NotesEngine instance
        custom_tools: ``custom_tool_*`` functions from a Python config

    Returns:
        Dict mapping tool names to their definitions.
    """

    tools = {}

    # ========== journal_note ==========
    tools["journal_note"] = {
        "name": "journal_note",
        "description": "Return the path of a daily, weekly or monthly journal note, creating it from its template if absent. Never overwrites.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "kind": {
                    "type": "string",
                    "enum": KINDS,
                    "description": "Note granularity",
                },
                "date": {
                    "type": "string",
                    "description": "Explicit date (YYYY-MM-DD); takes precedence over offset",
                },
                "offset": {
                    "type": "integer",
                    "description": "Days, weeks or months relative to today",
                },
                "include_content": {
                    "type": "boolean",
                    "description": "Also return the note content (default: false)",
                },
            },
            "required": ["kind"],
        },
    }

    # ========== note_create ==========
    tools["note_create"] = {
        "name": "note_create",
        "description": "Create an empty note under notes/, named or timestamped.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Note name without extension (default: timestamp)",
                },
            },
        },
    }

    # ========== post_create ==========
    tools["post_create"] = {
        "name": "post_create",
        "description": "Create a timestamped post under posts/ with template expansion.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "content": {
                    "type": "string",
                    "description": "Post body; may contain {{date}} and {{> name}}",
                },
            },
        },
    }

    # ========== log_append ==========
    tools["log_append"] = {
        "name": "log_append",
        "description": "Append a structured log entry. Entries are never edited or removed.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "enum": LOG_TYPES,
                    "description": "Log category",
                },
                "datetime": {
                    "type": "string",
                    "description": "ISO 8601 timestamp (default: now)",
                },
                "duration": {
                    "type": "string",
                    "description": "Duration token such as 30m, 1h or 45s",
                },
                "message": {
                    "type": "string",
                    "description": "Optional annotation",
                },
            },
            "required": ["type"],
        },
    }

    # ========== log_read ==========
    tools["log_read"] = {
        "name": "log_read",
        "description": "Read the log entries of a calendar day in recorded order.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "date": {
                    "type": "string",
                    "description": "Day to read (YYYY-MM-DD, default: today)",
                },
            },
        },
    }

    # ========== log_summary ==========
    tools["log_summary"] = {
        "name": "log_summary",
        "description": "Summarize a day's log entries per type: count, total duration, last message.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "date": {
                    "type": "string",
                    "description": "Day to summarize (YYYY-MM-DD, default: today)",
                },
            },
        },
    }

    # ========== template_expand ==========
    tools["template_expand"] = {
        "name": "template_expand",
        "description": "Expand {{date}} and {{> name}} directives using the templates directory.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "content": {
                    "type": "string",
                    "description": "Text to expand",
                },
            },
            "required": ["content"],
        },
    }

    # ========== list_templates ==========
    tools["list_templates"] = {
        "name": "list_templates",
        "description": "List available templates.",
        "inputSchema": {
            "type": "object",
            "properties": {},
        },
    }

    for tool_name, func in (custom_tools or {}).items():
        tools[tool_name] = custom_tool_definition(tool_name, func)

    return tools


def _day_argument(arguments: dict[str, Any]) -> date:
    value = arguments.get("date")
    return as_date(value) if value else date.today()


async def execute_tool(
    engine: NotesEngine,
    name: str,
    arguments: dict[str, Any],
    custom_tools: Optional[CustomTools] = None,
) -> dict[str, Any]:
    """Execute a notes tool and return the result.

    Args:
        engine: NotesEngine instance
        name: Tool name
        arguments: Tool arguments
        custom_tools: ``custom_tool_*`` functions, checked before built-in tools

    Returns:
        Result dict with success status and data or error
    """
    try:
        if custom_tools and name in custom_tools:
            return await _run_custom_tool(engine, name, custom_tools[name], arguments)

        if name == "journal_note":
            path = engine.get_or_create_journal_note(
                kind=arguments["kind"],
                date_value=arguments.get("date"),
                offset=arguments.get("offset"),
            )
            result = {
                "success": True,
                "path": str(path),
            }
            if arguments.get("include_content", False):
                result["content"] = path.read_text(encoding="utf-8")
            return result

        elif name == "note_create":
            path = engine.create_note(arguments.get("name"))
            return {
                "success": True,
                "path": str(path),
            }

        elif name == "post_create":
            path = engine.create_post(arguments.get("content", ""))
            return {
                "success": True,
                "path": str(path),
            }

        elif name == "log_append":
            entry = engine.log(
                arguments["type"],
                duration=arguments.get("duration"),
                datetime_input=arguments.get("datetime"),
                message=arguments.get("message"),
            )
            return {
                "success": True,
                "entry": entry.to_dict(),
                "message": f"Logged {entry.type.value}",
            }

        elif name == "log_read":
            entries = engine.logs_for_day(_day_argument(arguments))
            return {
                "success": True,
                "count": len(entries),
                "entries": [e.to_dict() for e in entries],
            }

        elif name == "log_summary":
            summary = engine.summary_for_day(_day_argument(arguments))
            return {
                "success": True,
                "summary": {k: v.to_dict() for k, v in summary.items()},
                "lines": format_summary(summary),
            }

        elif name == "template_expand":
            return {
                "success": True,
                "content": engine.templates.expand(arguments["content"]),
            }

        elif name == "list_templates":
            return {
                "success": True,
                "templates": engine.templates.list_names(),
            }

        else:
            return {
                "success": False,
                "error": f"Unknown tool: {name}",
            }

    except ValidationError as e:
        return {
            "success": False,
            "error": str(e),
            "error_type": "validation_error",
            "field": e.field,
        }

    except InvalidDateError as e:
        return {
            "success": False,
            "error": str(e),
            "error_type": "invalid_date",
            "suggestion": "Use a YYYY-MM-DD date",
        }

    except TemplateNotFoundError as e:
        return {
            "success": False,
            "error": str(e),
            "error_type": "template_not_found",
            "suggestion": "Use list_templates to see available templates.",
        }

    except CyclicIncludeError as e:
        return {
            "success": False,
            "error": str(e),
            "error_type": "cyclic_include",
            "chain": e.chain,
        }

    except LogStoreError as e:
        return {
            "success": False,
            "error": str(e),
            "error_type": "log_store_error",
        }

    except DaybookError as e:
        return {
            "success": False,
            "error": str(e),
            "error_type": "daybook_error",
        }

    except Exception as e:
        return {
            "success": False,
            "error": str(e),
            "error_type": "unexpected_error",
        }
