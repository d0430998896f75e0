from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from vkeyboard.core.colors import Color, KeyboardColors, parse_color, validate_key_color
from vkeyboard.core.errors import KeyboardConfigurationError
from vkeyboard.core.layout import DEFAULT_KEY_SIZE, Language

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "VKEYBOARD_SETTINGS"

_LANGUAGE_ALIASES = {
    "english": Language.ENGLISH,
    "eng": Language.ENGLISH,
    "en": Language.ENGLISH,
    "russian": Language.RUSSIAN,
    "rus": Language.RUSSIAN,
    "ru": Language.RUSSIAN,
}


@dataclass
class KeyboardSettings:
    """Start-up configuration of a keyboard, usually read from YAML."""

    language: Language = Language.ENGLISH
    separate_numeric_block: bool = False
    key_width: int = DEFAULT_KEY_SIZE
    key_height: int = DEFAULT_KEY_SIZE
    key_color: Color = KeyboardColors.KEY
    key_text_color: Color = KeyboardColors.KEY_TEXT
    background_color: Color = KeyboardColors.BACKGROUND
    additional_keys: Optional[str] = None


def default_settings_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "settings.yaml"


def load_settings(path: Optional[Union[str, Path]] = None) -> KeyboardSettings:
    """Load settings from *path*, ``$VKEYBOARD_SETTINGS`` or the packaged default.

    A missing file is an error when it was asked for explicitly; a missing
    packaged default just yields the built-in defaults.
    """
    explicit = path is not None or bool(os.environ.get(SETTINGS_ENV_VAR))
    if path is not None:
        settings_path = Path(path).expanduser()
    elif os.environ.get(SETTINGS_ENV_VAR):
        settings_path = Path(os.environ[SETTINGS_ENV_VAR]).expanduser()
    else:
        settings_path = default_settings_path()

    if not settings_path.exists():
        if explicit:
            raise FileNotFoundError(f"Settings file not found: {settings_path}")
        logger.warning("Settings file not found: %s; using defaults", settings_path)
        return KeyboardSettings()

    try:
        raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise KeyboardConfigurationError(f"{settings_path.name}: invalid YAML: {e}") from e

    if raw is None:
        return KeyboardSettings()
    if not isinstance(raw, dict):
        raise KeyboardConfigurationError(f"{settings_path.name}: expected a mapping of settings")

    settings = parse_settings(raw, source=settings_path.name)
    logger.info("Loaded keyboard settings from %s", settings_path)
    return settings


def parse_settings(raw: Dict[str, Any], source: str = "settings") -> KeyboardSettings:
    settings = KeyboardSettings()
    known = set(KeyboardSettings.__dataclass_fields__)
    for key in raw:
        if key not in known:
            logger.warning("%s: ignoring unknown setting %r", source, key)

    if "language" in raw:
        value = str(raw["language"]).strip().lower()
        if value not in _LANGUAGE_ALIASES:
            raise KeyboardConfigurationError(f"{source}: unknown language {raw['language']!r}")
        settings.language = _LANGUAGE_ALIASES[value]

    if "separate_numeric_block" in raw:
        value = raw["separate_numeric_block"]
        if not isinstance(value, bool):
            raise KeyboardConfigurationError(f"{source}: 'separate_numeric_block' must be true or false")
        settings.separate_numeric_block = value

    for field_name in ("key_width", "key_height"):
        if field_name in raw:
            value = raw[field_name]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise KeyboardConfigurationError(f"{source}: {field_name!r} must be a positive integer")
            setattr(settings, field_name, value)

    for field_name in ("key_color", "key_text_color", "background_color"):
        if field_name in raw:
            try:
                setattr(settings, field_name, parse_color(raw[field_name]))
            except KeyboardConfigurationError as e:
                raise KeyboardConfigurationError(f"{source}: {field_name!r}: {e}") from e
    try:
        validate_key_color(settings.key_color)
    except KeyboardConfigurationError as e:
        raise KeyboardConfigurationError(f"{source}: 'key_color': {e}") from e

    if raw.get("additional_keys") is not None:
        value = str(raw["additional_keys"])
        if not value.strip():
            raise KeyboardConfigurationError(f"{source}: 'additional_keys' must not be blank")
        settings.additional_keys = value

    return settings
