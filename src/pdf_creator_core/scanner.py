"""
Image folder scanning.

Lists the direct children of a folder, keeps the image files and returns them
in natural filename order.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import total_ordering
from pathlib import Path

from .errors import NotADirectory
from .natural_sort import natural_compare

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".bmp", ".gif")


@total_ordering
@dataclass(frozen=True, eq=False)
class ImageFile:
    """
    An image file selected for conversion.

    Ordering and equality are derived solely from ``display_name`` through the
    natural comparator.
    """

    path: Path
    display_name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.path.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageFile):
            return NotImplemented
        return natural_compare(self.display_name, other.display_name) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ImageFile):
            return NotImplemented
        return natural_compare(self.display_name, other.display_name) < 0

    def __hash__(self) -> int:
        # names that compare equal always have the same length
        return hash(len(self.display_name))


def is_image_file(name: str) -> bool:
    """Check whether a filename carries one of the supported image extensions."""
    return name.lower().endswith(IMAGE_EXTENSIONS)


def scan_image_folder(folder: Path | str) -> list[ImageFile]:
    """
    Collect the image files directly inside ``folder``.

    Args:
        folder: Directory to scan (not recursive)

    Returns:
        Image files sorted in natural order; empty if there are none

    Raises:
        NotADirectory: If the folder does not exist or is not a directory
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise NotADirectory(folder)

    try:
        entries = list(os.scandir(folder))
    except OSError as e:
        raise NotADirectory(folder, technical_message=f"{type(e).__name__}: {e}") from e

    images = []
    for entry in entries:
        # is_file() follows symlinks, so a link counts as its target's type
        try:
            if not entry.is_file():
                continue
        except OSError:
            logger.debug(f"Skipping unreadable entry: {entry.path}")
            continue
        if is_image_file(entry.name):
            images.append(ImageFile(Path(entry.path), entry.name))

    images.sort()
    logger.info(f"Found {len(images)} image(s) in {folder}")
    return images
