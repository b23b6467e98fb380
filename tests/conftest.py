"""
Shared fixtures for PDF Creator tests.
"""

import os
from collections.abc import Callable
from pathlib import Path

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PIL import Image  # noqa: E402


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a solid-colour image into ``tmp_path`` (or a given folder)."""

    def _make(
        name: str,
        size: tuple[int, int] = (40, 30),
        mode: str = "RGB",
        folder: Path | None = None,
        color: object = "red",
    ) -> Path:
        target = (folder or tmp_path) / name
        image = Image.new(mode, size, color)
        fmt = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".bmp": "BMP", ".gif": "GIF"}[
            Path(name).suffix.lower()
        ]
        image.save(target, format=fmt)
        return target

    return _make


@pytest.fixture
def image_folder(tmp_path: Path, make_image: Callable[..., Path]) -> Path:
    """A folder with three PNG images named out of natural order."""
    for name in ("img10.png", "img2.png", "img1.png"):
        make_image(name)
    return tmp_path
