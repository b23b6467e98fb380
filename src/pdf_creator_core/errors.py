"""
Centralized error taxonomy for PDF Creator.

This module provides the custom exception hierarchy used by the folder scanner,
the PDF assembler and the conversion controller, so that every failure of a run
can be reported to the user in a consistent way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error type categories for consistent error handling."""

    FILE = "file"
    CONVERSION = "conversion"
    SYSTEM = "system"
    VALIDATION = "validation"


class ErrorCode(Enum):
    """Specific error codes for the conversion pipeline."""

    # Source folder errors
    NOT_A_DIRECTORY = "NOT_A_DIRECTORY"
    NO_IMAGES_FOUND = "NO_IMAGES_FOUND"

    # Image and output errors
    IMAGE_DECODE_ERROR = "IMAGE_DECODE_ERROR"
    WRITE_ERROR = "WRITE_ERROR"

    # Validation errors
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_INPUT = "INVALID_INPUT"

    # System errors
    OPERATION_CANCELLED = "OPERATION_CANCELLED"
    MEMORY_ERROR = "MEMORY_ERROR"
    OS_ERROR = "OS_ERROR"

    # Generic
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with structured metadata.

    This is the root of all custom application errors. The ``user_message`` is
    what ends up in the status banner; ``technical_message`` goes to the log.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retriable: bool = False
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return user-friendly error message."""
        return self.user_message

    def __repr__(self) -> str:
        """Return detailed error representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"type={self.type.value}, "
            f"code={self.code.value}, "
            f"message='{self.user_message}'"
            f")"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "retriable": self.retriable,
            "context": self.context,
        }


class NotADirectory(BaseAppError):
    """The source folder does not exist or is not a directory."""

    def __init__(self, folder: Path | str, technical_message: str | None = None):
        super().__init__(
            type=ErrorType.FILE,
            code=ErrorCode.NOT_A_DIRECTORY,
            user_message=f"The folder '{folder}' does not exist or is not a directory.",
            technical_message=technical_message,
            context={"folder": str(folder)},
        )

    @property
    def folder(self) -> str:
        return self.context["folder"]


class NoImagesFound(BaseAppError):
    """The scan succeeded but yielded no image files."""

    def __init__(self, folder: Path | str | None = None):
        where = f" in '{folder}'" if folder else ""
        super().__init__(
            type=ErrorType.FILE,
            code=ErrorCode.NO_IMAGES_FOUND,
            user_message=f"No image files were found{where}.",
            severity=ErrorSeverity.LOW,
            context={"folder": str(folder)} if folder else {},
        )


class ImageDecodeError(BaseAppError):
    """An image could not be opened or decoded."""

    def __init__(self, file: Path | str, technical_message: str | None = None):
        super().__init__(
            type=ErrorType.CONVERSION,
            code=ErrorCode.IMAGE_DECODE_ERROR,
            user_message=f"Could not read the image '{Path(file).name}'.",
            technical_message=technical_message,
            severity=ErrorSeverity.HIGH,
            context={"file": str(file)},
        )

    @property
    def file(self) -> str:
        """Get the path of the offending image."""
        return self.context["file"]


class WriteError(BaseAppError):
    """The output PDF could not be written."""

    def __init__(self, path: Path | str, technical_message: str | None = None):
        super().__init__(
            type=ErrorType.FILE,
            code=ErrorCode.WRITE_ERROR,
            user_message=f"Could not write the PDF file '{path}'.",
            technical_message=technical_message,
            severity=ErrorSeverity.HIGH,
            retriable=True,
            context={"path": str(path)},
        )


class SystemError(BaseAppError):
    """System and unexpected errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        retriable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=retriable,
            context=context or {},
        )


class ValidationError(BaseAppError):
    """Input validation related errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        field: str | None = None,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        context = context or {}
        if field:
            context["field"] = field

        super().__init__(
            type=ErrorType.VALIDATION,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            context=context,
        )

    @property
    def field(self) -> str | None:
        """Get the field that caused the validation error."""
        return self.context.get("field")


class CancellationError(SystemError):
    """Raised at a cancellation checkpoint once cancellation was requested."""

    def __init__(self, message: str = "Operation was cancelled"):
        super().__init__(
            code=ErrorCode.OPERATION_CANCELLED,
            user_message=message,
            severity=ErrorSeverity.LOW,
            retriable=True,
        )


# Exception mapping configuration
_EXCEPTION_MAPPING: dict[type[Exception], tuple[ErrorCode, str]] = {
    PermissionError: (ErrorCode.OS_ERROR, "Permission denied"),
    OSError: (ErrorCode.OS_ERROR, "System error occurred"),
    MemoryError: (ErrorCode.MEMORY_ERROR, "Insufficient memory"),
}


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Map an arbitrary exception to an application error.

    Args:
        exc: The exception to map
        context: Optional context information

    Returns:
        BaseAppError instance with appropriate metadata
    """
    if isinstance(exc, BaseAppError):
        return exc

    context = context or {}
    exc_type = type(exc)
    for mapped_type, (code, default_message) in _EXCEPTION_MAPPING.items():
        if isinstance(exc, mapped_type):
            return SystemError(
                code=code,
                user_message=str(exc) if str(exc) else default_message,
                technical_message=f"{exc_type.__name__}: {exc}",
                context=context,
            )

    logger.warning(f"Unknown exception type: {exc_type.__name__}: {exc}")
    return SystemError(
        code=ErrorCode.UNKNOWN,
        user_message="An unexpected error occurred",
        technical_message=f"{exc_type.__name__}: {exc}",
        context=context,
    )


def to_user_message(error: BaseAppError) -> str:
    """
    Build the banner text shown for a failed run.

    A missing-images failure is phrased as guidance to pick another folder;
    everything else gets the general failure banner with the error detail.
    """
    if error.code == ErrorCode.NO_IMAGES_FOUND:
        return "No images found. Please choose a folder that contains JPG, PNG, BMP or GIF files."

    message = f"Failed to create the PDF: {error.user_message}"
    if error.retriable:
        message += " You can try again."
    return message
