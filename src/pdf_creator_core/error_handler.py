"""
Centralized error handling and logging infrastructure for PDF Creator.

This module provides a singleton ErrorHandler that captures, logs and reports
exceptions that escape the conversion pipeline, plus the logging bootstrap
used at application start.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, Signal

from .config import get_logs_dir
from .errors import BaseAppError, map_exception

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ErrorHandler(QObject):
    """
    Centralized error handler with logging and Qt signal emission.

    Unhandled exceptions on the UI thread and on plain Python threads are
    routed here through the installed hooks instead of ending the process.
    """

    # Signal emitted when an error occurs (thread-safe)
    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the error handler (called only once due to singleton)."""
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = threading.excepthook

        self._setup_logging()

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Normalize an exception into a BaseAppError.

        Args:
            exception: The exception to capture
            context: Optional context information

        Returns:
            BaseAppError with normalized metadata
        """
        app_error = map_exception(exception, dict(context or {}))

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        if "traceback" not in app_error.context:
            tb_str = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
            app_error.context["traceback"] = tb_str

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and broadcast an exception.

        Returns:
            BaseAppError for further processing
        """
        app_error = self.capture(exception, context)

        if self._logger:
            self._logger.error(
                f"[{app_error.code.value}] {app_error.user_message}",
                exc_info=exception,
            )

        self.errorOccurred.emit(app_error)
        return app_error

    def _setup_logging(self) -> None:
        """Set up rotating file logging in the app data directory."""
        ErrorHandler._logger = logging.getLogger("pdf_creator.errors")
        ErrorHandler._logger.setLevel(logging.DEBUG)
        ErrorHandler._logger.propagate = False

        if ErrorHandler._logger.handlers:
            return

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        try:
            logs_dir = get_logs_dir()
            logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                logs_dir / "app.log",
                maxBytes=5_242_880,  # 5MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            ErrorHandler._logger.addHandler(file_handler)
        except OSError as e:
            logging.getLogger(__name__).error(f"Failed to setup error log file: {e}")

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.WARNING)
        ErrorHandler._logger.addHandler(console_handler)

    def install_hooks(self) -> None:
        """Install exception hooks for unhandled exceptions."""

        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            if not isinstance(exc_value, Exception):
                self._original_excepthook(exc_type, exc_value, exc_traceback)
                return
            self.handle(exc_value, {"source": "sys.excepthook"})

        def threading_exception_hook(args: threading.ExceptHookArgs) -> None:
            if not isinstance(args.exc_value, Exception):
                self._original_threading_excepthook(args)
                return
            self.handle(
                args.exc_value,
                {"source": "threading.excepthook", "thread": args.thread.name if args.thread else "unknown"},
            )

        sys.excepthook = exception_hook
        threading.excepthook = threading_exception_hook

    def restore_hooks(self) -> None:
        """Restore original exception hooks."""
        sys.excepthook = self._original_excepthook
        threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    """Get the global ErrorHandler instance."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """
    Set up global error handling for the application.

    This should be called once during application startup.
    """
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Initialize logging configuration.

    Args:
        level: Root log level name
        log_file: Optional extra file receiving all log records
    """
    get_error_handler()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )
