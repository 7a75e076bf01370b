"""Tests for configuration loading."""

from pathlib import Path

import pytest

from daybook.config import (
    DaybookConfig,
    ROOT_ENV_VAR,
    dict_to_config,
    find_config_file,
    load_config,
    load_json_config,
    load_python_config,
    resolve_root,
)


class TestFindConfigFile:
    """Tests for find_config_file."""

    def test_finds_python_config(self, temp_root):
        """Python config is found first."""
        (temp_root / "daybook_config.py").write_text("CONFIG = {}")
        (temp_root / "daybook.toml").write_text("")

        found = find_config_file(temp_root)
        assert found.name == "daybook_config.py"

    def test_finds_toml_config(self, temp_root):
        """TOML config is found if no Python config."""
        (temp_root / "daybook.toml").write_text("")

        found = find_config_file(temp_root)
        assert found.name == "daybook.toml"

    def test_finds_json_config(self, temp_root):
        """JSON config is found if no Python/TOML."""
        (temp_root / "daybook.json").write_text("{}")

        found = find_config_file(temp_root)
        assert found.name == "daybook.json"

    def test_finds_dotfile_config(self, temp_root):
        """Dotfile configs are found."""
        (temp_root / ".daybook.toml").write_text("")

        found = find_config_file(temp_root)
        assert found.name == ".daybook.toml"

    def test_returns_none_if_no_config(self, temp_root):
        assert find_config_file(temp_root) is None


class TestResolveRoot:
    """Tests for resolve_root."""

    def test_explicit_wins(self, temp_root, monkeypatch):
        monkeypatch.setenv(ROOT_ENV_VAR, "/somewhere/else")
        assert resolve_root(temp_root) == temp_root.resolve()

    def test_environment(self, temp_root, monkeypatch):
        monkeypatch.setenv(ROOT_ENV_VAR, str(temp_root))
        assert resolve_root() == temp_root.resolve()

    def test_cwd_fallback(self, temp_root, monkeypatch):
        monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
        monkeypatch.chdir(temp_root)
        assert resolve_root() == temp_root.resolve()


class TestLoadJsonConfig:
    """Tests for load_json_config."""

    def test_loads_json(self, temp_root):
        config_file = temp_root / "config.json"
        config_file.write_text('{"directories": {"journals": "diary"}}')

        data = load_json_config(config_file)
        assert data["directories"]["journals"] == "diary"


class TestLoadPythonConfig:
    """Tests for load_python_config."""

    def test_loads_config_dict(self, temp_root):
        config_file = temp_root / "daybook_config.py"
        config_file.write_text('''
CONFIG = {
    "journal": {"weekend_fallback": False},
}
''')

        data, tools = load_python_config(config_file)
        assert data["journal"]["weekend_fallback"] is False

    def test_extracts_custom_tools(self, temp_root):
        """Extracts custom_tool_* functions."""
        config_file = temp_root / "daybook_config.py"
        config_file.write_text('''
CONFIG = {}

def custom_tool_streak(engine, params):
    return {"result": "ok"}

def custom_tool_another(engine, params):
    return {}
''')

        data, tools = load_python_config(config_file)
        assert "streak" in tools
        assert "another" in tools
        assert callable(tools["streak"])


class TestDictToConfig:
    """Tests for dict_to_config."""

    def test_defaults(self, temp_root):
        config = dict_to_config({}, temp_root)
        assert config.root == temp_root
        assert config.journals_dir == "journals"
        assert config.templates_dir == "templates"
        assert config.weekend_fallback is True
        assert config.weekend_template == "# {{date}}"

    def test_sets_directories(self, temp_root):
        data = {
            "directories": {
                "journals": "diary",
                "templates": "tpl",
                "logs": "activity",
                "notes": "scratch",
                "posts": "blog",
            }
        }
        config = dict_to_config(data, temp_root)
        assert config.get_journals_path() == temp_root / "diary"
        assert config.get_templates_path() == temp_root / "tpl"
        assert config.get_logs_path() == temp_root / "activity"
        assert config.get_notes_path() == temp_root / "scratch"
        assert config.get_posts_path() == temp_root / "blog"

    def test_sets_journal_policy(self, temp_root):
        data = {"journal": {"weekend_fallback": False, "weekend_template": "## {{date}}"}}
        config = dict_to_config(data, temp_root)
        assert config.weekend_fallback is False
        assert config.weekend_template == "## {{date}}"

    def test_sets_log_level(self, temp_root):
        config = dict_to_config({"logging": {"level": "debug"}}, temp_root)
        assert config.log_level == "DEBUG"


class TestLoadConfig:
    """Tests for load_config."""

    def test_returns_defaults_without_config(self, temp_root):
        config = load_config(temp_root)
        assert config == DaybookConfig(root=temp_root)

    def test_loads_toml_config(self, temp_root):
        (temp_root / "daybook.toml").write_text('''
[directories]
journals = "diary"

[journal]
weekend_fallback = false
''')

        config = load_config(temp_root)
        assert config.journals_dir == "diary"
        assert config.weekend_fallback is False

    def test_loads_json_config(self, temp_root):
        (temp_root / "daybook.json").write_text('{"directories": {"logs": "activity"}}')

        config = load_config(temp_root)
        assert config.logs_dir == "activity"

    def test_loads_python_config_with_tools(self, temp_root):
        (temp_root / "daybook_config.py").write_text('''
CONFIG = {"directories": {"notes": "scratch"}}

def custom_tool_test(engine, params):
    return {"ok": True}
''')

        config = load_config(temp_root)
        assert config.notes_dir == "scratch"
        assert "test" in config.custom_tools

    def test_explicit_config_path(self, temp_root):
        config_file = temp_root / "custom" / "my-config.json"
        config_file.parent.mkdir()
        config_file.write_text('{"directories": {"posts": "blog"}}')

        config = load_config(temp_root, config_path=config_file)
        assert config.posts_dir == "blog"

    def test_unsupported_suffix(self, temp_root):
        config_file = temp_root / "config.yaml"
        config_file.write_text("")
        with pytest.raises(ValueError, match="Unsupported config file type"):
            load_config(temp_root, config_path=Path(config_file))
