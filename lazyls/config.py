"""Persistent JSON config holding default listing options.

Command-line flags always win over these values. All access is defensive:
a missing, unreadable, or malformed config falls back to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazyls"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def _load_str(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_bool(data: dict[str, object], key: str) -> bool:
    """Only explicit booleans count; anything else falls back to ``False``."""
    value = data.get(key)
    return value if isinstance(value, bool) else False


def load_sort_word(data: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if data is None else data, "sort")


def load_time_style(data: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if data is None else data, "time_style")


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if data is None else data, "theme")


def load_group_directories_first(data: dict[str, object] | None = None) -> bool:
    return _load_bool(load_config() if data is None else data, "group_directories_first")


def load_colour_scale(data: dict[str, object] | None = None) -> bool:
    return _load_bool(load_config() if data is None else data, "colour_scale")


def load_ignore_globs(data: dict[str, object] | None = None) -> list[str]:
    """Return configured ignore globs, dropping non-string and empty items."""
    value = (load_config() if data is None else data).get("ignore_globs")
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]
