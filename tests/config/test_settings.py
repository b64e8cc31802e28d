"""Tests for the settings configuration module."""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from scriptengine.config import (
    ScriptEngineSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    reset_settings,
    set_settings,
)
from scriptengine.exceptions import ConfigurationError


class TestDefaults:
    def test_default_values(self):
        settings = ScriptEngineSettings()
        assert settings.app_name == "scriptengine"
        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.log_file is None
        assert settings.default_to_fountain is True
        assert settings.max_import_bytes == 10 * 1024 * 1024
        assert settings.export_indent == 2
        assert settings.export_directory is None

    def test_normalization(self):
        settings = ScriptEngineSettings(log_level="debug", log_format="JSON")
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"log_level": "LOUD"},
            {"log_format": "xml"},
            {"max_import_bytes": 0},
            {"export_indent": 9},
            {"export_indent": -1},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            ScriptEngineSettings(**overrides)

    def test_path_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXPORT_ROOT", str(tmp_path))
        settings = ScriptEngineSettings(export_directory="$EXPORT_ROOT/exports")
        assert settings.export_directory == (tmp_path / "exports").resolve()


class TestEnvironment:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SCRIPTENGINE_EXPORT_INDENT", "4")
        monkeypatch.setenv("SCRIPTENGINE_DEFAULT_TO_FOUNTAIN", "false")
        settings = ScriptEngineSettings.from_env()
        assert settings.export_indent == 4
        assert settings.default_to_fountain is False

    def test_dotenv_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("SCRIPTENGINE_LOG_LEVEL=info\n")
        settings = ScriptEngineSettings.from_multiple_sources(env_file=env_file)
        assert settings.log_level == "INFO"


class TestFromFile:
    def test_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"export_indent": 4, "debug": True}))
        settings = ScriptEngineSettings.from_file(path)
        assert settings.export_indent == 4
        assert settings.debug is True

    def test_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('log_format = "json"\nmax_import_bytes = 2048\n')
        settings = ScriptEngineSettings.from_file(path)
        assert settings.log_format == "json"
        assert settings.max_import_bytes == 2048

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"default_to_fountain": False}))
        assert ScriptEngineSettings.from_file(path).default_to_fountain is False

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert ScriptEngineSettings.from_file(path).export_indent == 2

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[scriptengine]\n")
        with pytest.raises(ConfigurationError, match="Unsupported configuration"):
            ScriptEngineSettings.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScriptEngineSettings.from_file(tmp_path / "missing.yaml")

    def test_misspelled_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"indent": 4}))
        with pytest.raises(ConfigurationError) as exc_info:
            ScriptEngineSettings.from_file(path)
        assert "export_indent" in exc_info.value.hint


class TestPrecedence:
    def test_later_files_override(self, tmp_path):
        first = tmp_path / "a.yaml"
        first.write_text(yaml.safe_dump({"export_indent": 4, "debug": True}))
        second = tmp_path / "b.json"
        second.write_text(json.dumps({"export_indent": 6}))

        settings = ScriptEngineSettings.from_multiple_sources(
            config_files=[first, second]
        )
        assert settings.export_indent == 6
        assert settings.debug is True

    def test_file_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCRIPTENGINE_EXPORT_INDENT", "3")
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"export_indent": 5}))

        settings = ScriptEngineSettings.from_multiple_sources(config_files=[path])
        assert settings.export_indent == 5

    def test_cli_overrides_everything(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"export_indent": 5}))

        settings = ScriptEngineSettings.from_multiple_sources(
            config_files=[path], cli_args={"export_indent": 1, "debug": None}
        )
        assert settings.export_indent == 1
        assert settings.debug is False

    def test_missing_config_file_is_skipped(self, tmp_path):
        settings = ScriptEngineSettings.from_multiple_sources(
            config_files=[tmp_path / "nope.yaml"]
        )
        assert settings.export_indent == 2


class TestGlobalSettings:
    def test_get_settings_is_cached(self):
        clear_settings_cache()
        assert get_settings() is get_settings()

    def test_set_settings(self):
        custom = ScriptEngineSettings(export_indent=7)
        set_settings(custom)
        assert get_settings() is custom

    def test_reset_settings(self):
        set_settings(ScriptEngineSettings(export_indent=7))
        reset_settings()
        assert get_settings().export_indent == 2

    def test_cwd_config_file_is_discovered(self, tmp_path):
        # The test environment runs inside tmp_path
        Path("scriptengine.yaml").write_text(yaml.safe_dump({"export_indent": 3}))
        clear_settings_cache()
        assert get_settings().export_indent == 3

    def test_settings_for_cli(self, tmp_path):
        path = tmp_path / "cli.toml"
        path.write_text("export_indent = 8\n")

        settings = get_settings_for_cli(path, {"log_level": "DEBUG"})
        assert settings.export_indent == 8
        assert settings.log_level == "DEBUG"

    def test_settings_for_cli_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_settings_for_cli(tmp_path / "missing.toml")

    def test_settings_for_cli_overrides_global(self):
        set_settings(ScriptEngineSettings(export_indent=4))
        settings = get_settings_for_cli(cli_overrides={"debug": True})
        assert settings.debug is True
        assert settings.export_indent == 4
