"""Cross-platform file system helpers for the GUI.

Used after a successful run to show the generated PDF's folder in the native
file manager.
"""

import logging
import platform
import subprocess
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QMessageBox, QWidget

logger = logging.getLogger(__name__)

_FALLBACK_COMMANDS = {
    "windows": "explorer",
    "darwin": "open",
    "linux": "xdg-open",
}


def containing_folder(path: Path) -> Path:
    """Return ``path`` itself for a directory, its parent otherwise."""
    return path if path.is_dir() else path.parent


def open_in_file_manager(path: Path, parent: QWidget | None = None) -> bool:
    """Open a folder, or the folder holding a file, in the OS file manager.

    Qt's QDesktopServices is tried first, then the platform's own command.

    Args:
        path: A directory, or a file whose folder should be shown.
        parent: Optional parent widget for the error dialog.

    Returns:
        True if the folder was opened, False otherwise.
    """
    folder = containing_folder(Path(path))
    if not folder.is_dir():
        logger.warning(f"Cannot open non-existent folder in file manager: {folder}")
        return False

    folder = folder.resolve()

    if QDesktopServices.openUrl(QUrl.fromLocalFile(str(folder))):
        logger.debug(f"Opened {folder} using QDesktopServices")
        return True
    logger.warning(f"QDesktopServices.openUrl returned False for {folder}")

    command = _FALLBACK_COMMANDS.get(platform.system().lower())
    if command:
        try:
            result = subprocess.run([command, str(folder)], check=False, capture_output=True)
        except (subprocess.SubprocessError, FileNotFoundError) as e:
            logger.error(f"'{command}' failed for {folder}: {e}")
        else:
            # explorer.exe reports a non-zero code even on success
            if command == "explorer" or result.returncode == 0:
                logger.debug(f"Opened {folder} using {command}")
                return True
            logger.warning(f"'{command}' failed with return code {result.returncode}")

    _show_file_manager_error(folder, parent)
    return False


def _show_file_manager_error(folder: Path, parent: QWidget | None = None) -> None:
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Icon.Warning)
    msg_box.setWindowTitle("Cannot Open Folder")
    msg_box.setText("Failed to open the folder in your file manager.")
    msg_box.setDetailedText(f"The PDF was saved to:\n{folder}")
    msg_box.setStandardButtons(QMessageBox.StandardButton.Ok)
    msg_box.exec()
