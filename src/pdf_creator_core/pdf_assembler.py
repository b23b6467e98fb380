"""
PDF assembly from a folder of images.

This module wraps reportlab and Pillow: every image becomes one page whose size
equals the image's pixel dimensions. It reports progress after each page,
supports cooperative cancellation between pages and writes the output
atomically, so a failed or cancelled run never leaves a partial PDF behind.
"""

from __future__ import annotations

import io
import logging
import os
import stat
import tempfile
import threading
from collections.abc import Callable, Sequence
from pathlib import Path

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .conversion_request import ConversionRequest
from .conversion_state import ConversionOutcome, ConversionProgress, ConversionState
from .errors import (
    BaseAppError,
    CancellationError,
    ImageDecodeError,
    NoImagesFound,
    WriteError,
    map_exception,
)
from .scanner import ImageFile, scan_image_folder

logger = logging.getLogger(__name__)

# Type aliases for callbacks
ProgressCallback = Callable[[ConversionProgress], None]
StateCallback = Callable[[ConversionState], None]

DEFAULT_CREATOR = "PDF Creator"

# Modes reportlab draws directly; everything else is converted first
_DIRECT_MODES = {"RGB", "RGBA", "L", "CMYK"}


class CancellationToken:
    """
    Simple cancellation token for cooperative cancellation.

    The assembler checks the token between images; setting it never interrupts
    an image that is already being decoded.
    """

    def __init__(self) -> None:
        """Initialize the cancellation token."""
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Request cancellation of the operation."""
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled.is_set()

    def check_cancelled(self) -> None:
        """
        Check if cancelled and raise an exception if so.

        Raises:
            CancellationError: If cancellation has been requested
        """
        if self.is_cancelled():
            raise CancellationError("Operation was cancelled")


def _output_mode(output_path: Path) -> int:
    """Permission bits for the output: the existing file's, else 0666 minus the umask."""
    try:
        existing = os.stat(output_path)
    except FileNotFoundError:
        pass
    else:
        if stat.S_ISREG(existing.st_mode):
            return stat.S_IMODE(existing.st_mode)
    # os.umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _prepare_image(image: Image.Image) -> tuple[Image.Image, str | None]:
    """Bring an image into a mode reportlab can draw, returning it with its mask setting."""
    if image.mode in ("LA", "PA") or (image.mode == "P" and "transparency" in image.info):
        image = image.convert("RGBA")
    elif image.mode not in _DIRECT_MODES:
        image = image.convert("RGB")

    mask = "auto" if image.mode == "RGBA" else None
    return image, mask


class PdfAssembler:
    """
    Builds one PDF document from an ordered list of images.

    A single assembler may be reused for several runs; each run owns its own
    reportlab canvas, which never leaves the calling thread.
    """

    def __init__(self, creator: str = DEFAULT_CREATOR) -> None:
        self.creator = creator

    def run(
        self,
        request: ConversionRequest,
        progress_cb: ProgressCallback | None = None,
        state_cb: StateCallback | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> ConversionOutcome:
        """
        Execute a complete run: scan, render every image, save.

        Every exception is converted into the terminal outcome here, so this
        method returns exactly one ``ConversionOutcome`` and does not raise.

        Args:
            request: Title and source folder of the run
            progress_cb: Optional callback receiving a report after each image
            state_cb: Optional callback receiving every state transition
            cancel_token: Optional cancellation token

        Returns:
            Succeeded, Failed or Cancelled outcome
        """

        def set_state(state: ConversionState) -> None:
            logger.debug(f"Conversion state -> {state.name}")
            if state_cb:
                state_cb(state)

        try:
            set_state(ConversionState.SCANNING)
            images = scan_image_folder(request.source_folder)
            if not images:
                raise NoImagesFound(request.source_folder)

            output_path = self.assemble(
                images,
                request,
                progress_cb=progress_cb,
                cancel_token=cancel_token,
                state_cb=set_state,
            )
            outcome = ConversionOutcome.succeeded(output_path, pages=len(images))
            logger.info(f"PDF created successfully: {output_path}")

        except CancellationError:
            logger.info("Conversion was cancelled by user")
            outcome = ConversionOutcome.cancelled()

        except BaseAppError as e:
            logger.error(f"Conversion failed [{e.code.value}]: {e.user_message} ({e.technical_message})")
            outcome = ConversionOutcome.failed(e)

        except Exception as e:
            app_error = map_exception(e, {"title": request.title, "folder": str(request.source_folder)})
            logger.error(f"Unexpected error during conversion: {app_error.technical_message}")
            outcome = ConversionOutcome.failed(app_error)

        set_state(outcome.state)
        return outcome

    def assemble(
        self,
        images: Sequence[ImageFile],
        request: ConversionRequest,
        progress_cb: ProgressCallback | None = None,
        cancel_token: CancellationToken | None = None,
        state_cb: StateCallback | None = None,
    ) -> Path:
        """
        Render the images into a PDF and save it to ``request.output_path``.

        Raises:
            NoImagesFound: If ``images`` is empty
            CancellationError: If cancellation was requested between images
            ImageDecodeError: If an image cannot be read
            WriteError: If the PDF cannot be written
        """
        if not images:
            raise NoImagesFound(request.source_folder)

        # Snapshot the list; the total stays fixed for the whole run
        images = list(images)
        total = len(images)
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pageCompression=1)

        for index, image_file in enumerate(images, start=1):
            if cancel_token:
                cancel_token.check_cancelled()
            if state_cb:
                state_cb(ConversionState.RENDERING)

            self._add_page(pdf, image_file)

            if progress_cb:
                progress_cb(ConversionProgress(index, total, f"Added {image_file.display_name} ({index}/{total})"))

        # Last point where a cancel request is honored
        if cancel_token:
            cancel_token.check_cancelled()
        if state_cb:
            state_cb(ConversionState.SAVING)

        pdf.setTitle(request.title)
        pdf.setCreator(self.creator)
        pdf.setSubject(f"{total} page(s)")
        pdf.save()

        output_path = request.output_path
        self._write_atomically(output_path, buffer.getvalue())
        return output_path

    def _add_page(self, pdf: canvas.Canvas, image_file: ImageFile) -> None:
        """Append one page sized to the image and cover it with the image."""
        try:
            with Image.open(image_file.path) as image:
                image.load()
                width, height = image.size
                drawable, mask = _prepare_image(image)
                pdf.setPageSize((width, height))
                pdf.drawImage(ImageReader(drawable), 0, 0, width=width, height=height, mask=mask)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ImageDecodeError(image_file.path, technical_message=f"{type(e).__name__}: {e}") from e

        pdf.showPage()
        logger.debug(f"Added page {width}x{height} for {image_file.display_name}")

    def _write_atomically(self, output_path: Path, data: bytes) -> None:
        """Write ``data`` to a temporary sibling file, then move it into place."""
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.stem}-", suffix=".part", dir=output_path.parent)
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            # mkstemp creates 0600 files; give the PDF the mode a plain open() would
            os.chmod(tmp_name, _output_mode(output_path))
            os.replace(tmp_name, output_path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WriteError(output_path, technical_message=f"{type(e).__name__}: {e}") from e
