"""
Conversion state management for PDF Creator.

This module defines the run states, progress reports and terminal outcomes
shared between the PDF assembler, the worker thread and the UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from .errors import BaseAppError, to_user_message


class ConversionState(Enum):
    """
    States of a single conversion run.

    Idle -> Scanning -> Rendering (once per image) -> Saving, then one of the
    terminal states.
    """

    IDLE = auto()  # No conversion running, ready to start
    SCANNING = auto()  # Listing the source folder
    RENDERING = auto()  # Adding image pages
    SAVING = auto()  # Writing the PDF, no longer cancellable
    SUCCEEDED = auto()
    FAILED = auto()
    CANCELLED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (ConversionState.SUCCEEDED, ConversionState.FAILED, ConversionState.CANCELLED)


@dataclass(frozen=True)
class ConversionProgress:
    """Progress report emitted after each completed image."""

    current_index: int
    total: int
    message: str = ""

    def __post_init__(self) -> None:
        if self.current_index < 0 or self.total < 0:
            raise ValueError("Progress values must not be negative")
        if self.current_index > self.total:
            raise ValueError(f"Progress index {self.current_index} exceeds total {self.total}")

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return int(self.current_index * 100 / self.total)


class OutcomeKind(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ConversionOutcome:
    """
    Terminal result of a run. Exactly one is produced per request.

    Use the ``succeeded``, ``failed`` and ``cancelled`` constructors rather than
    building instances directly.
    """

    kind: OutcomeKind
    output_path: Path | None = None
    error: BaseAppError | None = None
    pages: int = 0

    @classmethod
    def succeeded(cls, output_path: Path, pages: int = 0) -> ConversionOutcome:
        return cls(OutcomeKind.SUCCEEDED, output_path=output_path, pages=pages)

    @classmethod
    def failed(cls, error: BaseAppError) -> ConversionOutcome:
        return cls(OutcomeKind.FAILED, error=error)

    @classmethod
    def cancelled(cls) -> ConversionOutcome:
        return cls(OutcomeKind.CANCELLED)

    @property
    def state(self) -> ConversionState:
        """The terminal state matching this outcome."""
        return {
            OutcomeKind.SUCCEEDED: ConversionState.SUCCEEDED,
            OutcomeKind.FAILED: ConversionState.FAILED,
            OutcomeKind.CANCELLED: ConversionState.CANCELLED,
        }[self.kind]

    @property
    def message(self) -> str:
        """Human readable summary for the status banner."""
        if self.kind is OutcomeKind.SUCCEEDED:
            return f"Created {self.output_path}"
        if self.kind is OutcomeKind.CANCELLED:
            return "Conversion was cancelled"
        assert self.error is not None
        return to_user_message(self.error)
