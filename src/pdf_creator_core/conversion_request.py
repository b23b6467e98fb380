"""
ConversionRequest dataclass.

A request is the snapshot of the user's title and source folder taken when a
conversion is triggered. It stays immutable for the duration of one run and is
the bridge between GUI state and the PDF assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import ErrorCode, ValidationError

PDF_SUFFIX = ".pdf"


def normalize_pdf_filename(title: str) -> str:
    """
    Turn a document title into the output filename.

    ".pdf" is appended only when the title does not already end with it, so
    "Report" and "Report.pdf" both become "Report.pdf".
    """
    return title if title.endswith(PDF_SUFFIX) else f"{title}{PDF_SUFFIX}"


@dataclass(frozen=True)
class ConversionRequest:
    """
    Parameters of one image-folder-to-PDF run.

    Attributes:
        title: Document title, also used as the output filename
        source_folder: Folder holding the images; the PDF is written there too
    """

    title: str
    source_folder: Path

    @classmethod
    def from_inputs(cls, title: str, folder: str | Path) -> ConversionRequest:
        """
        Create a request from raw GUI input.

        Raises:
            ValidationError: If the title or the folder is empty, or the title
                is nothing but the ".pdf" suffix
        """
        title = (title or "").strip()
        folder_text = str(folder or "").strip()

        if not title:
            raise ValidationError(
                code=ErrorCode.REQUIRED_FIELD_MISSING,
                user_message="Please enter a PDF title.",
                field="title",
            )
        if title == PDF_SUFFIX:
            raise ValidationError(
                code=ErrorCode.INVALID_INPUT,
                user_message="Please enter a PDF title, not just the file extension.",
                field="title",
            )
        if not folder_text:
            raise ValidationError(
                code=ErrorCode.REQUIRED_FIELD_MISSING,
                user_message="Please select a folder.",
                field="folder",
            )

        return cls(title=title, source_folder=Path(folder_text))

    @property
    def output_filename(self) -> str:
        return normalize_pdf_filename(self.title)

    @property
    def output_path(self) -> Path:
        """Destination of the generated PDF: ``<source_folder>/<title>.pdf``."""
        return self.source_folder / self.output_filename
