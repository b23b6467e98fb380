"""
Conversion handling for the PDF Creator GUI.

This module reacts to the conversion controller's signals and updates the main
window: button states, the progress bar and the status message.
"""

import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Slot

from pdf_creator_core.conversion_state import ConversionOutcome, ConversionState, OutcomeKind
from pdf_creator_core.errors import ErrorCode
from pdf_creator_core.threading import ConversionController
from pdf_creator_gui.utils.fs import open_in_file_manager

if TYPE_CHECKING:
    from pdf_creator_gui.main_window import MainWindow

PROCESSING_MESSAGES = {
    "PROCESSING": "Processing...",
    "SAVING": "Saving...",
    "COMPLETED": "Done!",
    "ERROR": "Failed...",
    "CANCELLED": "Cancelled",
    "EMPTY": "",
}


class ConversionHandler(QObject):
    """
    Applies conversion events to the main window.

    All slots here run on the UI thread; the controller delivers worker
    signals through queued connections.
    """

    def __init__(self, main_window: "MainWindow", controller: ConversionController) -> None:
        super().__init__(main_window)
        self._main_window = main_window
        self._controller = controller
        self._logger = logging.getLogger(__name__)
        self._conversion_id: str | None = None

        self._connect_controller_signals()

    def _connect_controller_signals(self) -> None:
        self._controller.conversionStarted.connect(self._on_conversion_started)
        self._controller.progressChanged.connect(self.on_progress_changed)
        self._controller.stateChanged.connect(self.on_state_changed)
        self._controller.outcomeReady.connect(self.on_outcome)
        self._controller.conversionFinished.connect(self._on_conversion_finished)

    def start_conversion(self) -> None:
        """Start a run for the current title and folder."""
        self._conversion_id = str(uuid.uuid4())[:8]
        if not self._controller.start_conversion():
            self._logger.debug(f"[{self._conversion_id}] Conversion not started")

    def cancel_conversion(self) -> None:
        """Cancel the current run."""
        self._main_window.cancel_button.setEnabled(False)
        self._controller.cancel_conversion()

    def clear_status(self) -> None:
        self._set_status(PROCESSING_MESSAGES["EMPTY"])
        self._main_window.open_folder_button.setVisible(False)

    def _set_status(self, text: str) -> None:
        self._main_window.processing_label.setText(text)

    @Slot()
    def _on_conversion_started(self) -> None:
        window = self._main_window
        self._logger.info(f"[{self._conversion_id or 'unknown'}] Conversion started")

        window.create_button.setEnabled(False)
        window.select_folder_button.setEnabled(False)
        window.title_input.setReadOnly(True)
        window.cancel_button.setEnabled(True)
        window.cancel_button.setVisible(True)
        window.open_folder_button.setVisible(False)

        window.progress_bar.setRange(0, 0)  # busy until the first report
        window.progress_bar.setValue(0)
        window.progress_bar.setVisible(True)
        self._set_status(PROCESSING_MESSAGES["PROCESSING"])

    @Slot(int, int, str)
    def on_progress_changed(self, current: int, total: int, message: str) -> None:
        """
        Handle a progress report.

        Args:
            current: Number of images added so far
            total: Number of images in the run
            message: Status text naming the current file
        """
        bar = self._main_window.progress_bar
        bar.setRange(0, max(total, 1))
        bar.setValue(min(current, total))
        bar.setToolTip(message)
        self._set_status(f"{PROCESSING_MESSAGES['PROCESSING']} {message}")

    @Slot(object)
    def on_state_changed(self, state: ConversionState) -> None:
        if state is ConversionState.SAVING:
            self._main_window.cancel_button.setEnabled(False)
            self._set_status(PROCESSING_MESSAGES["SAVING"])

    @Slot(object)
    def on_outcome(self, outcome: ConversionOutcome) -> None:
        """Show the terminal outcome of the run."""
        window = self._main_window
        conversion_id = self._conversion_id or "unknown"

        if outcome.kind is OutcomeKind.SUCCEEDED:
            self._logger.info(f"[{conversion_id}] Conversion completed: {outcome.output_path}")
            window.last_output_path = outcome.output_path
            window.progress_bar.setValue(window.progress_bar.maximum())
            self._set_status(f"{PROCESSING_MESSAGES['COMPLETED']} {outcome.output_path}")
            window.open_folder_button.setVisible(True)
            if window.config_manager and window.config_manager.get("open_folder_on_success"):
                open_in_file_manager(Path(outcome.output_path), window)

        elif outcome.kind is OutcomeKind.CANCELLED:
            self._logger.info(f"[{conversion_id}] Conversion cancelled by user")
            self._set_status(PROCESSING_MESSAGES["CANCELLED"])

        else:
            error = outcome.error
            code = error.code if error else ErrorCode.UNKNOWN
            self._logger.error(f"[{conversion_id}] Conversion failed: {code.value}")
            if code is ErrorCode.NO_IMAGES_FOUND:
                self._set_status(outcome.message)
            else:
                self._set_status(f"{PROCESSING_MESSAGES['ERROR']} {outcome.message}")

    @Slot()
    def _on_conversion_finished(self) -> None:
        """Restore the idle UI once the worker has been cleaned up."""
        window = self._main_window
        window.cancel_button.setVisible(False)
        window.progress_bar.setVisible(False)
        window.select_folder_button.setEnabled(True)
        window.title_input.setReadOnly(False)
        window.create_button.setEnabled(self._controller.is_enabled())
