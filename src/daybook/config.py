"""Configuration loading for daybook.

Supports two tiers:
1. Simple config via .toml or .json - most users
2. Python config via .py - power users adding custom MCP tools

The root directory itself is never read from the config file; it is resolved
once by the entry point and passed in.
"""

from __future__ import annotations

import importlib.util
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

# Python 3.11+ has tomllib in stdlib; fall back to tomli for older versions
try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Python <3.11
    except ImportError:  # pragma: no cover
        tomllib = None

ROOT_ENV_VAR = "DAYBOOK_ROOT"

DEFAULT_WEEKEND_TEMPLATE = "# {{date}}"


@dataclass
class DaybookConfig:
    """Configuration for a notes root directory."""

    root: Path = field(default_factory=Path.cwd)

    # Directory structure (relative to root)
    journals_dir: str = "journals"
    templates_dir: str = "templates"
    logs_dir: str = "logs"
    notes_dir: str = "notes"
    posts_dir: str = "posts"

    # On Saturday/Sunday, skip the full template and use weekend_template
    weekend_fallback: bool = True
    weekend_template: str = DEFAULT_WEEKEND_TEMPLATE

    log_level: str = "WARNING"

    # Custom tools (populated from Python config)
    custom_tools: dict[str, Callable] = field(default_factory=dict)

    def get_journals_path(self) -> Path:
        return self.root / self.journals_dir

    def get_templates_path(self) -> Path:
        return self.root / self.templates_dir

    def get_logs_path(self) -> Path:
        return self.root / self.logs_dir

    def get_notes_path(self) -> Path:
        return self.root / self.notes_dir

    def get_posts_path(self) -> Path:
        return self.root / self.posts_dir


def resolve_root(explicit: Optional[Path] = None) -> Path:
    """Resolve the root directory: explicit path, then $DAYBOOK_ROOT, then cwd."""
    if explicit is not None:
        return Path(explicit).expanduser().resolve()
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path.cwd().resolve()


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from TOML file."""
    if tomllib is None:
        raise ImportError("tomli required for TOML config: pip install tomli")
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    """Load configuration from JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_python_config(path: Path) -> tuple[dict[str, Any], dict[str, Callable]]:
    """Load configuration from Python file.

    Returns:
        Tuple of (config_dict, custom_tools_dict)

    Convention:
        - CONFIG dict or config dict for static configuration
        - Functions named custom_tool_* become MCP tools
    """
    spec = importlib.util.spec_from_file_location("daybook_config", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load Python config from {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["daybook_config"] = module
    spec.loader.exec_module(module)

    config_dict = {}
    if hasattr(module, "CONFIG"):
        config_dict = module.CONFIG
    elif hasattr(module, "config"):
        config_dict = module.config

    custom_tools = {}
    for name in dir(module):
        if name.startswith("custom_tool_"):
            tool_name = name[12:]  # Remove "custom_tool_" prefix
            custom_tools[tool_name] = getattr(module, name)

    return config_dict, custom_tools


def dict_to_config(data: dict[str, Any], root: Path) -> DaybookConfig:
    """Convert dictionary to DaybookConfig."""
    config = DaybookConfig(root=root)

    if "directories" in data:
        dirs = data["directories"]
        if "journals" in dirs:
            config.journals_dir = dirs["journals"]
        if "templates" in dirs:
            config.templates_dir = dirs["templates"]
        if "logs" in dirs:
            config.logs_dir = dirs["logs"]
        if "notes" in dirs:
            config.notes_dir = dirs["notes"]
        if "posts" in dirs:
            config.posts_dir = dirs["posts"]

    if "journal" in data:
        journal = data["journal"]
        if "weekend_fallback" in journal:
            config.weekend_fallback = bool(journal["weekend_fallback"])
        if "weekend_template" in journal:
            config.weekend_template = journal["weekend_template"]

    if "logging" in data:
        if "level" in data["logging"]:
            config.log_level = str(data["logging"]["level"]).upper()

    return config


def find_config_file(root: Path) -> Optional[Path]:
    """Find configuration file in the root directory.

    Search order:
    1. daybook_config.py (most flexible)
    2. daybook.toml
    3. daybook.json
    4. .daybook.toml
    5. .daybook.json
    """
    candidates = [
        "daybook_config.py",
        "daybook.toml",
        "daybook.json",
        ".daybook.toml",
        ".daybook.json",
    ]

    for name in candidates:
        path = root / name
        if path.exists():
            return path

    return None


def load_config(root: Path, config_path: Optional[Path] = None) -> DaybookConfig:
    """Load configuration for a root directory.

    Args:
        root: Root directory of the notes tree
        config_path: Optional explicit path to config file

    Returns:
        DaybookConfig instance
    """
    if config_path is None:
        config_path = find_config_file(root)

    if config_path is None:
        return DaybookConfig(root=root)

    suffix = config_path.suffix.lower()

    if suffix == ".py":
        config_dict, custom_tools = load_python_config(config_path)
        config = dict_to_config(config_dict, root)
        config.custom_tools = custom_tools
        return config

    elif suffix == ".toml":
        return dict_to_config(load_toml_config(config_path), root)

    elif suffix == ".json":
        return dict_to_config(load_json_config(config_path), root)

    else:
        raise ValueError(f"Unsupported config file type: {suffix}")
