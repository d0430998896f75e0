"""Tests for vkeyboard.core.settings – YAML keyboard settings."""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest

from vkeyboard.core.colors import Color, KeyboardColors
from vkeyboard.core.errors import KeyboardConfigurationError
from vkeyboard.core.layout import Language
from vkeyboard.core.settings import (
    SETTINGS_ENV_VAR,
    KeyboardSettings,
    default_settings_path,
    load_settings,
    parse_settings,
)


@pytest.fixture(autouse=True)
def _no_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)


def _write(tmp_path: Path, content: str, name: str = "settings.yaml") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Defaults and the packaged file
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_dataclass_defaults(self):
        s = KeyboardSettings()
        assert s.language is Language.ENGLISH
        assert s.separate_numeric_block is False
        assert (s.key_width, s.key_height) == (54, 54)
        assert s.key_color == KeyboardColors.KEY
        assert s.additional_keys is None

    def test_packaged_file_exists(self):
        assert default_settings_path().exists()

    def test_packaged_file_matches_builtin_defaults(self):
        s = load_settings()
        assert s.language is Language.ENGLISH
        assert s.key_color == KeyboardColors.KEY
        assert s.key_text_color == KeyboardColors.KEY_TEXT
        assert s.background_color == KeyboardColors.BACKGROUND
        assert s.additional_keys == "`~!@#$%^&*()-_=+/?><."

    def test_missing_packaged_file_falls_back(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        import vkeyboard.core.settings as settings_module

        monkeypatch.setattr(settings_module, "default_settings_path", lambda: tmp_path / "absent.yaml")
        assert load_settings() == KeyboardSettings()


# ---------------------------------------------------------------------------
# Loading from a path
# ---------------------------------------------------------------------------

class TestLoadSettings:
    def test_full_file(self, tmp_path: Path):
        path = _write(
            tmp_path,
            """
            language: russian
            separate_numeric_block: true
            key_width: 60
            key_height: 40
            key_color: "#102030"
            key_text_color: [1, 2, 3]
            background_color: "#80000000"
            additional_keys: "abc"
            """,
        )
        s = load_settings(path)
        assert s.language is Language.RUSSIAN
        assert s.separate_numeric_block is True
        assert (s.key_width, s.key_height) == (60, 40)
        assert s.key_color == Color(16, 32, 48)
        assert s.key_text_color == Color(1, 2, 3)
        assert s.background_color == Color(0, 0, 0, 128)
        assert s.additional_keys == "abc"

    def test_string_path(self, tmp_path: Path):
        path = _write(tmp_path, "language: eng\n")
        assert load_settings(str(path)).language is Language.ENGLISH

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = _write(tmp_path, "")
        assert load_settings(path) == KeyboardSettings()

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = _write(tmp_path, "language: ru\n")
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
        assert load_settings().language is Language.RUSSIAN

    def test_explicit_path_wins_over_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        env_path = _write(tmp_path, "language: russian\n", name="env.yaml")
        explicit = _write(tmp_path, "language: english\n", name="explicit.yaml")
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(env_path))
        assert load_settings(explicit).language is Language.ENGLISH

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_missing_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(tmp_path / "nope.yaml"))
        with pytest.raises(FileNotFoundError):
            load_settings()

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write(tmp_path, "language: [unclosed\n")
        with pytest.raises(KeyboardConfigurationError, match="settings.yaml"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = _write(tmp_path, "- a\n- b\n")
        with pytest.raises(KeyboardConfigurationError):
            load_settings(path)


# ---------------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------------

class TestParseSettings:
    def test_language_case_insensitive(self):
        assert parse_settings({"language": "  Russian "}).language is Language.RUSSIAN

    def test_unknown_language(self):
        with pytest.raises(KeyboardConfigurationError, match="language"):
            parse_settings({"language": "klingon"})

    def test_numeric_block_must_be_bool(self):
        with pytest.raises(KeyboardConfigurationError):
            parse_settings({"separate_numeric_block": "yes please"})

    @pytest.mark.parametrize("value", [0, -5, "54", True, 1.5])
    def test_key_size_must_be_positive_int(self, value):
        with pytest.raises(KeyboardConfigurationError):
            parse_settings({"key_width": value})

    def test_small_key_size_accepted_for_later_clamping(self):
        assert parse_settings({"key_height": 10}).key_height == 10

    def test_bright_key_colour_rejected(self):
        with pytest.raises(KeyboardConfigurationError, match="key_color"):
            parse_settings({"key_color": [206, 0, 0]})

    def test_bright_text_colour_allowed(self):
        assert parse_settings({"key_text_color": "#FFFFFF"}).key_text_color == Color(255, 255, 255)

    def test_bad_colour(self):
        with pytest.raises(KeyboardConfigurationError, match="background_color"):
            parse_settings({"background_color": "red"})

    def test_blank_additional_keys(self):
        with pytest.raises(KeyboardConfigurationError):
            parse_settings({"additional_keys": "  "})

    def test_null_additional_keys_ignored(self):
        assert parse_settings({"additional_keys": None}).additional_keys is None

    def test_unknown_key_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            parse_settings({"colour_scheme": "dark"}, source="mine.yaml")
        assert "colour_scheme" in caplog.text
        assert "mine.yaml" in caplog.text
