# edithistory/utils/utils.py
"""
edithistory.utils.utils
=======================

Configuration helpers for the edithistory engine.

Key functionalities include:
- Embedded defaults: `DEFAULT_CONFIG` always provides a runnable configuration.
- Configuration loading: `load_config` reads a TOML file (an explicit path, or
  `~/.config/edithistory/config.toml` when present) and deep-merges it over the
  defaults. Missing or malformed files fall back to the defaults.
- Settings extraction: `history_settings` returns a validated copy of the
  ``[history]`` table for `make_history`.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

logger = logging.getLogger("edithistory")

# --- Constants ---
DEFAULT_MAX_SIZE = 100
HISTORY_MODES = ("operation", "snapshot")

DEFAULT_CONFIG: Dict[str, Any] = {
    "history": {
        "mode": "operation",
        "max_size": DEFAULT_MAX_SIZE,
        "insert_merge_gap": 0,
        "coalesce": True,
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": True,
        "separate_error_log": False,
    },
}


def get_user_config_path() -> Path:
    """Location of the optional per-user configuration file."""
    return Path.home() / ".config" / "edithistory" / "config.toml"


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges a TOML configuration file over them.

    Args:
        path: Explicit configuration file. When omitted, the per-user file is used
            if it exists.

    Returns:
        The merged configuration. Never raises: unreadable files are logged and the
        defaults are returned.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    config_path = Path(path) if path is not None else get_user_config_path()
    if not config_path.is_file():
        if path is not None:
            logger.warning(f"Config file '{config_path}' not found. Using defaults.")
        return final_config

    try:
        user_config = toml.load(config_path)
        final_config = deep_merge(final_config, user_config)
        logger.info(f"Successfully loaded and merged config from {config_path}")
    except Exception as e:
        logger.error(f"Could not parse config '{config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _non_negative_int(settings: Dict[str, Any], key: str) -> int:
    value = settings.get(key)
    default = DEFAULT_CONFIG["history"][key]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        logger.warning(f"Invalid history.{key} value {value!r}; using default {default}.")
        return default
    return value


def history_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Returns the validated ``[history]`` table of `config`, completed with defaults.

    Invalid values are logged and replaced by their defaults.
    """
    table = (config or {}).get("history", {})
    if not isinstance(table, dict):
        logger.warning(f"Ignoring malformed [history] section: {table!r}")
        table = {}
    settings = deep_merge(DEFAULT_CONFIG["history"], table)

    mode = str(settings.get("mode", "operation")).lower()
    if mode not in HISTORY_MODES:
        logger.warning(f"Unknown history mode {settings.get('mode')!r}; falling back to 'operation'.")
        mode = "operation"

    return {
        "mode": mode,
        "max_size": _non_negative_int(settings, "max_size"),
        "insert_merge_gap": _non_negative_int(settings, "insert_merge_gap"),
        "coalesce": bool(settings.get("coalesce", True)),
    }
