"""
Shared application state.

The model holds the title and folder chosen by the user. It is created once at
startup and handed to both the conversion controller and the main window.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, Signal

from .conversion_request import PDF_SUFFIX, normalize_pdf_filename


class PdfCreatorModel(QObject):
    """
    Observable title/folder state with derived values.

    Signals:
        titleChanged(str): The PDF title changed
        folderChanged(str): The source folder changed
        changed(): Either value changed
    """

    titleChanged = Signal(str)
    folderChanged = Signal(str)
    changed = Signal()

    def __init__(self, title: str = "", folder: str = "", parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._title = title
        self._folder = folder

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        value = value or ""
        if value == self._title:
            return
        self._title = value
        self.titleChanged.emit(value)
        self.changed.emit()

    @property
    def folder(self) -> str:
        return self._folder

    @folder.setter
    def folder(self, value: str) -> None:
        value = value or ""
        if value == self._folder:
            return
        self._folder = value
        self.folderChanged.emit(value)
        self.changed.emit()

    @property
    def inputs_complete(self) -> bool:
        """True when both a usable title and a folder are set."""
        return self._title.strip() not in ("", PDF_SUFFIX) and bool(self._folder.strip())

    @property
    def output_hint(self) -> str:
        """
        Preview of the file the next run will create.

        Empty while the inputs are incomplete.
        """
        if not self.inputs_complete:
            return ""
        return str(Path(self._folder.strip()) / normalize_pdf_filename(self._title.strip()))
