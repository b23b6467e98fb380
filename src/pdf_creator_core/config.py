"""
Configuration defaults for PDF Creator.

This module provides the application identifiers, the default settings and the
standard locations used by the configuration manager and the log files.
"""

from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Application identifiers for QSettings
APP_ORGANIZATION = "PDF Creator"
APP_NAME = "PDF Creator"

# Default configuration with all supported keys and QSettings-friendly types
DEFAULT_CONFIG: dict[str, Any] = {
    # UI state restored on the next start
    "last_folder": "",
    "last_title": "",
    # Behaviour
    "open_folder_on_success": False,
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_app_data_dir() -> Path:
    """
    Get the writable application data directory using QStandardPaths.

    Falls back to ``<ConfigLocation>/<organization>/<app>`` when no app data
    location is available on the platform.
    """
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if location:
        return Path(location)

    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def get_logs_dir() -> Path:
    return get_app_data_dir() / "logs"


def get_default_folder() -> str:
    """
    Get the folder the folder picker opens on first use.

    Returns:
        The user's Pictures directory, or the home directory as fallback
    """
    pictures_dir = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.PicturesLocation)
    if pictures_dir and Path(pictures_dir).exists():
        return pictures_dir
    return str(Path.home())


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
