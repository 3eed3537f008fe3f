"""User settings loaded from the per-user config directory.

Settings live in ``settings.json`` under the OS-appropriate config
location. A missing or broken file never stops the editor from starting:
problems are logged and defaults are used instead.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    pending_key_timeout: float = EditorConstants.PENDING_KEY_TIMEOUT
    log_level: str = "WARNING"
    log_file: Optional[str] = None


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir("tinyvi")) / "settings.json"


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if setting is valid, False otherwise.
    """
    if key == 'pending_key_timeout_ms':
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        return (EditorConstants.MIN_PENDING_KEY_TIMEOUT_MS
                <= value <= EditorConstants.MAX_PENDING_KEY_TIMEOUT_MS)
    if key == 'log_level':
        return isinstance(value, str) and value.upper() in LOG_LEVELS
    if key == 'log_file':
        return isinstance(value, str) and bool(value)
    # Unknown settings are considered valid (forward compatibility)
    return True


def _read_settings_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return {}
    return data


def load_settings(path: Optional[Path] = None,
                  environ: Optional[Dict[str, str]] = None) -> Settings:
    """Load settings, falling back to defaults for anything missing or invalid.

    Args:
        path: Settings file; defaults to the user config directory.
        environ: Environment to read overrides from; defaults to os.environ.
    """
    path = path or default_settings_path()
    environ = os.environ if environ is None else environ
    data = _read_settings_file(path)

    settings = Settings()
    for key, value in data.items():
        if not validate_setting(key, value):
            logger.warning(f"Ignoring invalid setting {key}={value!r} in {path}")
            continue
        if key == 'pending_key_timeout_ms':
            settings.pending_key_timeout = value / 1000.0
        elif key == 'log_level':
            settings.log_level = value.upper()
        elif key == 'log_file':
            settings.log_file = value
        else:
            logger.debug(f"Unknown setting {key} in {path}")

    log_file = environ.get(EditorConstants.LOG_FILE_ENV)
    if log_file:
        settings.log_file = log_file
    return settings
