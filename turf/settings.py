"""User settings for the turf editor.

Settings live in a JSON file in the OS-appropriate config directory. A
missing or broken file is never fatal: unusable values are logged and the
defaults from EditorConstants are kept.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    poll_timeout: float = EditorConstants.POLL_TIMEOUT
    placeholder: str = EditorConstants.PLACEHOLDER
    quit_key: str = EditorConstants.QUIT_KEY
    show_banner: bool = False
    banner_text: str = EditorConstants.BANNER_TEXT


def default_settings_path() -> Path:
    return (Path(platformdirs.user_config_dir(EditorConstants.APP_NAME))
            / EditorConstants.SETTINGS_FILENAME)


def _valid_poll_timeout(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _valid_char(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 1 and value.isprintable()


def _valid_quit_key(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 1 and value.isalpha() and value.isascii()


_VALIDATORS = {
    "poll_timeout": _valid_poll_timeout,
    "placeholder": _valid_char,
    "quit_key": _valid_quit_key,
    "show_banner": lambda v: isinstance(v, bool),
    "banner_text": lambda v: isinstance(v, str),
}


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from path (default: the user config directory)."""
    settings = Settings()
    settings_file = Path(path) if path is not None else default_settings_path()
    if not settings_file.exists():
        return settings

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return settings

    for key, value in data.items():
        validator = _VALIDATORS.get(key)
        if validator is None:
            logger.warning(f"Unknown setting {key!r} ignored")
        elif not validator(value):
            logger.warning(f"Invalid value for {key!r}: {value!r}, using default")
        else:
            if key == "poll_timeout":
                value = float(value)
            elif key == "quit_key":
                value = value.lower()
            setattr(settings, key, value)

    logger.debug(f"Loaded settings from {settings_file}: {settings}")
    return settings
