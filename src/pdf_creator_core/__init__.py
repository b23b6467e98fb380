"""
Core functionality for PDF Creator.

Natural filename ordering, image folder scanning and the cancellable
image-to-PDF assembly, independent of the widgets that drive them.
"""

from .conversion_request import ConversionRequest
from .conversion_state import ConversionOutcome, ConversionProgress, ConversionState, OutcomeKind
from .natural_sort import natural_compare, natural_sorted
from .pdf_assembler import CancellationToken, PdfAssembler
from .scanner import IMAGE_EXTENSIONS, ImageFile, scan_image_folder

__version__ = "1.0.0"

__all__ = [
    "IMAGE_EXTENSIONS",
    "CancellationToken",
    "ConversionOutcome",
    "ConversionProgress",
    "ConversionRequest",
    "ConversionState",
    "ImageFile",
    "OutcomeKind",
    "PdfAssembler",
    "natural_compare",
    "natural_sorted",
    "scan_image_folder",
]
