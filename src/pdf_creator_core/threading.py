"""
Threading system for non-blocking PDF creation.

This module provides a QThread-based worker that runs the PDF assembler
without freezing the UI, and the controller that owns the worker, enforces a
single active run and relays progress and the terminal outcome back to the UI
thread.
"""

from __future__ import annotations

import logging
from time import monotonic

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from .conversion_request import ConversionRequest
from .conversion_state import ConversionOutcome, ConversionProgress, ConversionState, OutcomeKind
from .errors import BaseAppError, ValidationError, map_exception
from .model import PdfCreatorModel
from .pdf_assembler import CancellationToken, PdfAssembler

logger = logging.getLogger(__name__)


class ConversionWorker(QThread):
    """
    QThread-based worker for running one PDF creation without blocking the UI.

    Signals:
        progressChanged(int, int, str): Images completed, total and status message
        stateChanged(object): New ConversionState of the run
        conversionCompleted(str): PDF written, with its path
        conversionError(str, str): Run failed, with error code and user message
        conversionCanceled(): Run was cancelled by user request
        outcomeReady(object): The ConversionOutcome, emitted after the terminal signal
    """

    progressChanged = Signal(int, int, str)  # current, total, message
    stateChanged = Signal(object)  # ConversionState
    conversionCompleted = Signal(str)  # output path
    conversionError = Signal(str, str)  # error code, message
    conversionCanceled = Signal()
    outcomeReady = Signal(object)  # ConversionOutcome

    def __init__(
        self,
        request: ConversionRequest,
        *,
        assembler: PdfAssembler | None = None,
        parent: QObject | None = None,
        progress_throttle_ms: int = 0,
    ) -> None:
        """
        Initialize the conversion worker.

        Args:
            request: Snapshot of the title and folder to convert
            assembler: PDF assembler to use (a default one is created if omitted)
            parent: Parent QObject for lifetime management
            progress_throttle_ms: Minimum milliseconds between progress updates (0 = no throttling)
        """
        super().__init__(parent)

        self.request = request
        self._assembler = assembler or PdfAssembler()
        self._cancel_token = CancellationToken()
        self._throttle_ms = max(0, progress_throttle_ms)
        self._last_progress_emit = 0.0
        self.outcome: ConversionOutcome | None = None

        self.setObjectName("ConversionWorker")

    @Slot()
    def cancel(self) -> None:
        """
        Request cancellation of the run.

        Thread-safe; the worker stops at the next image boundary.
        """
        logger.info("Cancellation requested for conversion worker")
        self._cancel_token.cancel()

    def _is_cancelled(self) -> bool:
        return self._cancel_token.is_cancelled()

    def _should_emit_progress(self, progress: ConversionProgress) -> bool:
        """Check if enough time has passed to emit another progress update."""
        if self._throttle_ms == 0 or progress.current_index == progress.total:
            return True

        now = monotonic()
        if (now - self._last_progress_emit) * 1000 >= self._throttle_ms:
            self._last_progress_emit = now
            return True
        return False

    def _progress_callback(self, progress: ConversionProgress) -> None:
        # Signals across threads are automatically queued by Qt
        if self._should_emit_progress(progress):
            self.progressChanged.emit(progress.current_index, progress.total, progress.message)

    def _state_callback(self, state: ConversionState) -> None:
        self.stateChanged.emit(state)

    def run(self) -> None:
        """
        Main worker thread execution.

        Runs the assembler and emits exactly one terminal signal.
        """
        logger.info(f"Starting conversion: {self.request.source_folder} -> {self.request.output_path}")

        try:
            outcome = self._assembler.run(
                self.request,
                progress_cb=self._progress_callback,
                state_cb=self._state_callback,
                cancel_token=self._cancel_token,
            )
        except Exception as e:
            # PdfAssembler.run converts its own errors; this only guards callbacks
            logger.error(f"Unexpected error in conversion worker: {type(e).__name__}: {e}")
            outcome = ConversionOutcome.failed(map_exception(e))

        self.outcome = outcome

        if outcome.kind is OutcomeKind.SUCCEEDED:
            self.conversionCompleted.emit(str(outcome.output_path))
        elif outcome.kind is OutcomeKind.CANCELLED:
            self.conversionCanceled.emit()
        else:
            error: BaseAppError | None = outcome.error
            code = error.code.value if error else "UNKNOWN"
            self.conversionError.emit(code, outcome.message)

        self.outcomeReady.emit(outcome)


class ConversionController(QObject):
    """
    Manages conversion runs against the shared model.

    The controller snapshots the model into a ConversionRequest when a run is
    triggered, keeps at most one worker alive and tells the UI when the create
    action is available.
    """

    conversionStarted = Signal()
    conversionFinished = Signal()  # Emitted after cleanup
    enabledChanged = Signal(bool)
    progressChanged = Signal(int, int, str)
    stateChanged = Signal(object)
    conversionCompleted = Signal(str)
    conversionError = Signal(str, str)
    conversionCanceled = Signal()
    outcomeReady = Signal(object)

    def __init__(
        self,
        model: PdfCreatorModel,
        parent: QObject | None = None,
        *,
        assembler: PdfAssembler | None = None,
        progress_throttle_ms: int = 0,
    ) -> None:
        super().__init__(parent)
        self.model = model
        self.current_worker: ConversionWorker | None = None
        self._assembler = assembler or PdfAssembler()
        self._progress_throttle_ms = progress_throttle_ms
        self._cleanup_in_progress = False
        self._last_enabled = self.is_enabled()

        self.model.changed.connect(self._update_enabled)
        self.setObjectName("ConversionController")
        logger.debug("ConversionController initialized.")

    def is_running(self) -> bool:
        """Check if a conversion is currently running."""
        return self.current_worker is not None

    def is_enabled(self) -> bool:
        """Whether a new run may be triggered right now."""
        return self.model.inputs_complete and not self.is_running()

    def output_preview(self) -> str:
        return self.model.output_hint

    @Slot()
    def _update_enabled(self) -> None:
        enabled = self.is_enabled()
        if enabled != self._last_enabled:
            self._last_enabled = enabled
            self.enabledChanged.emit(enabled)

    @Slot()
    def start_conversion(self) -> bool:
        """
        Start a run for the current model values.

        Does nothing while another run is active or when the inputs are
        incomplete.

        Returns:
            True if a worker was started
        """
        if self.is_running():
            logger.warning("Cannot start conversion: another conversion is already running")
            return False
        if not self.model.inputs_complete:
            logger.warning("Cannot start conversion: title or folder is missing")
            return False

        try:
            request = ConversionRequest.from_inputs(self.model.title, self.model.folder)
        except ValidationError as e:
            logger.warning(f"Cannot start conversion: {e.user_message}")
            return False

        worker = ConversionWorker(
            request,
            assembler=self._assembler,
            parent=self,
            progress_throttle_ms=self._progress_throttle_ms,
        )
        worker.setObjectName(f"ConversionWorker-{request.output_filename}")

        # Connect worker signals to controller's public signals
        worker.progressChanged.connect(self.progressChanged, Qt.ConnectionType.QueuedConnection)
        worker.stateChanged.connect(self.stateChanged, Qt.ConnectionType.QueuedConnection)
        worker.conversionCompleted.connect(self.conversionCompleted, Qt.ConnectionType.QueuedConnection)
        worker.conversionError.connect(self.conversionError, Qt.ConnectionType.QueuedConnection)
        worker.conversionCanceled.connect(self.conversionCanceled, Qt.ConnectionType.QueuedConnection)
        worker.outcomeReady.connect(self.outcomeReady, Qt.ConnectionType.QueuedConnection)
        worker.finished.connect(self._cleanup_worker, Qt.ConnectionType.QueuedConnection)

        self.current_worker = worker
        self._update_enabled()

        logger.info(f"Started new conversion worker for {request.output_path}")
        self.conversionStarted.emit()
        worker.start()
        return True

    @Slot()
    def cancel_conversion(self) -> None:
        """Request cancellation of the current run; no-op when idle."""
        if self.current_worker:
            logger.info("Requesting cancellation of current conversion")
            self.current_worker.cancel()
        else:
            logger.debug("No active conversion to cancel.")

    @Slot()
    def _cleanup_worker(self) -> None:
        """
        Clean up the worker thread after it has finished.

        Connected to the worker's finished signal, so it runs on the UI thread
        after every terminal signal has been delivered.
        """
        if self._cleanup_in_progress:
            logger.debug("Cleanup already in progress, skipping redundant call.")
            return

        self._cleanup_in_progress = True
        worker_to_clean = self.current_worker
        self.current_worker = None

        try:
            if worker_to_clean:
                try:
                    worker_to_clean.progressChanged.disconnect(self.progressChanged)
                    worker_to_clean.stateChanged.disconnect(self.stateChanged)
                    worker_to_clean.conversionCompleted.disconnect(self.conversionCompleted)
                    worker_to_clean.conversionError.disconnect(self.conversionError)
                    worker_to_clean.conversionCanceled.disconnect(self.conversionCanceled)
                    worker_to_clean.outcomeReady.disconnect(self.outcomeReady)
                    worker_to_clean.finished.disconnect(self._cleanup_worker)
                except (TypeError, RuntimeError):
                    logger.debug("Signals already disconnected or worker deleted.")

                if worker_to_clean.isRunning():
                    logger.warning(f"Worker {worker_to_clean.objectName()} is still running during cleanup. Waiting...")
                    worker_to_clean.wait(1000)

                worker_to_clean.deleteLater()
                logger.debug(f"Worker {worker_to_clean.objectName()} scheduled for deletion.")
        finally:
            self._cleanup_in_progress = False
            self._update_enabled()
            self.conversionFinished.emit()
            logger.debug("Conversion cleanup finished.")

    def wait_for_completion(self, timeout_ms: int = 0) -> bool:
        """
        Wait for the current worker to finish.

        This should generally only be called during application shutdown or
        in tests.
        """
        if self.current_worker:
            return self.current_worker.wait(timeout_ms) if timeout_ms else self.current_worker.wait()
        return True

    @Slot()
    def shutdown(self, timeout_ms: int = 3000) -> None:
        """Cancel any active run and wait for the worker when the app quits."""
        if self.is_running():
            logger.info("Application shutting down, canceling active conversion.")
            self.cancel_conversion()
            if not self.wait_for_completion(timeout_ms):
                logger.warning(f"Worker did not finish within {timeout_ms}ms during shutdown.")
        else:
            logger.debug("No active conversion during shutdown.")
