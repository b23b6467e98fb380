"""
Main window for the PDF Creator application.

This module contains the MainWindow class: a title field, a folder picker, a
preview of the output file, create/cancel buttons and the progress display.
"""

import logging
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pdf_creator_core.config import get_default_folder
from pdf_creator_core.config_manager import ConfigManager
from pdf_creator_core.model import PdfCreatorModel
from pdf_creator_core.threading import ConversionController
from pdf_creator_gui.conversion_handler import ConversionHandler
from pdf_creator_gui.utils.fs import open_in_file_manager

logger = logging.getLogger(__name__)

WINDOW_TITLE = "PDF Creator"


class MainWindow(QMainWindow):
    """
    Main application window.

    The model and controller are created by the caller and injected here; the
    window only binds widgets to them.
    """

    def __init__(
        self,
        model: PdfCreatorModel,
        controller: ConversionController,
        config_manager: ConfigManager | None = None,
    ) -> None:
        super().__init__()
        self.model = model
        self.controller = controller
        self.config_manager = config_manager
        self.last_output_path: Path | None = None

        self.setWindowTitle(WINDOW_TITLE)
        self.resize(560, 300)

        self._setup_ui()
        self.conversion_handler = ConversionHandler(self, controller)
        self._connect_signals()
        self._sync_from_model()

    def _setup_ui(self) -> None:
        """Build the widgets and layout."""
        central = QWidget()
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        # PDF title
        title_row = QHBoxLayout()
        title_row.addWidget(QLabel("PDF title:"))
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Document title")
        self.title_input.setAccessibleName("PDF title")
        title_row.addWidget(self.title_input, 1)
        layout.addLayout(title_row)

        # Source folder
        folder_row = QHBoxLayout()
        self.select_folder_button = QPushButton("Select Folder")
        self.select_folder_button.setAccessibleName("Select image folder")
        folder_row.addWidget(self.select_folder_button)
        self.folder_label = QLabel()
        self.folder_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self.folder_label.setAccessibleName("Selected folder")
        folder_row.addWidget(self.folder_label, 1)
        layout.addLayout(folder_row)

        # Output preview
        self.output_hint_label = QLabel()
        self.output_hint_label.setWordWrap(True)
        self.output_hint_label.setAccessibleName("Output file")
        self.output_hint_label.setVisible(False)
        layout.addWidget(self.output_hint_label)

        # Actions
        button_row = QHBoxLayout()
        self.create_button = QPushButton("Create PDF")
        self.create_button.setDefault(True)
        self.create_button.setEnabled(False)
        button_row.addWidget(self.create_button)
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.setVisible(False)
        button_row.addWidget(self.cancel_button)
        self.open_folder_button = QPushButton("Open Folder")
        self.open_folder_button.setVisible(False)
        button_row.addWidget(self.open_folder_button)
        button_row.addStretch(1)
        layout.addLayout(button_row)

        # Progress
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1)
        self.progress_bar.setValue(0)
        self.progress_bar.setFormat("%v / %m")
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.processing_label = QLabel("")
        self.processing_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.processing_label.setWordWrap(True)
        self.processing_label.setAccessibleName("Status message")
        layout.addWidget(self.processing_label)

        layout.addStretch(1)

    def _connect_signals(self) -> None:
        """Connect widget signals to the model and controller."""
        self.title_input.textChanged.connect(self._on_title_edited)
        self.select_folder_button.clicked.connect(self.on_select_folder)
        self.create_button.clicked.connect(self.on_create_clicked)
        self.cancel_button.clicked.connect(self.on_cancel_clicked)
        self.open_folder_button.clicked.connect(self.on_open_folder_clicked)

        self.model.titleChanged.connect(self._on_model_title_changed)
        self.model.folderChanged.connect(self.folder_label.setText)
        self.model.changed.connect(self._on_inputs_changed)

        self.controller.enabledChanged.connect(self.create_button.setEnabled)

    def _sync_from_model(self) -> None:
        self.title_input.setText(self.model.title)
        self.folder_label.setText(self.model.folder)
        self._update_output_hint()
        self.create_button.setEnabled(self.controller.is_enabled())

    def _on_title_edited(self, text: str) -> None:
        self.model.title = text

    def _on_model_title_changed(self, text: str) -> None:
        if self.title_input.text() != text:
            self.title_input.setText(text)

    def _on_inputs_changed(self) -> None:
        """Refresh the preview and clear the last status when the inputs change."""
        self._update_output_hint()
        if not self.controller.is_running():
            self.conversion_handler.clear_status()

    def _update_output_hint(self) -> None:
        hint = self.controller.output_preview()
        self.output_hint_label.setText(f"Output PDF: {hint}" if hint else "")
        self.output_hint_label.setVisible(bool(hint))

    def _start_folder(self) -> str:
        if self.model.folder:
            return self.model.folder
        if self.config_manager:
            last_folder = self.config_manager.get_last_folder()
            if last_folder:
                return last_folder
        return get_default_folder()

    def on_select_folder(self) -> None:
        """Let the user pick the image folder."""
        folder = QFileDialog.getExistingDirectory(self, "Select Folder", self._start_folder())
        if folder:
            self.model.folder = str(Path(folder).resolve())
            logger.info(f"Selected folder: {self.model.folder}")

    def on_create_clicked(self) -> None:
        self.conversion_handler.start_conversion()

    def on_cancel_clicked(self) -> None:
        self.conversion_handler.cancel_conversion()

    def on_open_folder_clicked(self) -> None:
        if self.last_output_path:
            open_in_file_manager(self.last_output_path, self)

    def save_ui_settings(self) -> None:
        """Remember the last title and folder for the next start."""
        if not self.config_manager:
            return
        self.config_manager.set("last_title", self.model.title)
        if self.model.folder:
            self.config_manager.set("last_folder", self.model.folder)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle window close event."""
        self.save_ui_settings()
        self.controller.shutdown()
        event.accept()
