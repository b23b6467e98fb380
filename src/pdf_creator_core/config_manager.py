"""
Persistent settings for PDF Creator.

Values live in QSettings under the application identifiers from ``config``.
Every read goes through the matching entry in ``DEFAULT_CONFIG``: missing keys
fall back to it and stored values are coerced to its type.
"""

import logging
from pathlib import Path
from typing import Any

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, LOG_LEVELS, setup_qsettings

logger = logging.getLogger(__name__)

_TRUE_STRINGS = ("true", "1", "yes", "on")


def _coerce(value: Any, like: Any) -> Any:
    """Convert a stored value to the type of ``like``; raises ValueError/TypeError."""
    if isinstance(like, bool):
        # Some QSettings backends hand booleans back as strings
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)
    if isinstance(like, (int, float, str)):
        return type(like)(value)
    if not isinstance(value, type(like)):
        raise TypeError(f"expected {type(like).__name__}, got {type(value).__name__}")
    return value


class ConfigManager:
    """QSettings wrapper with per-key defaults and type coercion."""

    def __init__(self) -> None:
        setup_qsettings()
        self._settings = QSettings()
        self._defaults = dict(DEFAULT_CONFIG)

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Read a setting.

        Args:
            key: Setting name
            default: Fallback overriding the one in DEFAULT_CONFIG

        Returns:
            The stored value coerced to the fallback's type, or the fallback
            when nothing usable is stored
        """
        fallback = self._defaults.get(key) if default is None else default
        stored = self._settings.value(key, fallback)
        if fallback is None:
            return stored

        try:
            return _coerce(stored, fallback)
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring stored value for '{key}' ({e}), using default")
            return fallback

    def set(self, key: str, value: Any) -> None:
        if key not in self._defaults:
            logger.debug(f"Storing setting without a default: '{key}'")
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_all(self) -> dict[str, Any]:
        """Return every known setting, stored values merged over the defaults."""
        return {key: self.get(key) for key in self._defaults}

    def get_last_folder(self) -> str | None:
        """
        The folder chosen in the previous session.

        None when nothing was saved or the folder no longer exists.
        """
        folder = self.get("last_folder")
        if folder and Path(folder).is_dir():
            return folder
        return None

    def get_log_level(self) -> str:
        level = str(self.get("log_level")).upper()
        if level not in LOG_LEVELS:
            logger.warning(f"Unknown log level '{level}', using {DEFAULT_CONFIG['log_level']}")
            return DEFAULT_CONFIG["log_level"]
        return level

    def reset_to_defaults(self) -> None:
        self._settings.clear()
        self._settings.sync()
        logger.info("Settings reset to defaults")

    def has_key(self, key: str) -> bool:
        return self._settings.contains(key)

    def remove_key(self, key: str) -> None:
        self._settings.remove(key)
        self._settings.sync()
