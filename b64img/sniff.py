"""Image type detection from content.

Formats are recognized by their magic bytes only. Filenames and claimed
MIME types are never trusted here.
"""

from __future__ import annotations

import io
from enum import Enum
from pathlib import PurePath


class ImageFormat(Enum):
    """Image formats recognized by signature."""

    PNG = ".png"
    JPEG = ".jpg"
    GIF = ".gif"
    WEBP = ".webp"
    BMP = ".bmp"
    SVG = ".svg"

    @property
    def extension(self) -> str:
        return self.value


# Extensions treated as image files by the dispatcher
IMAGE_EXTENSIONS: frozenset[str] = frozenset({
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
    ".bmp",
    ".svg",
})

# Window scanned for SVG markers
SVG_SNIFF_BYTES = 100


def detect_image_type(data: bytes) -> ImageFormat | None:
    """
    Detect the image format of raw bytes.

    Args:
        data: Raw bytes (only the first 100 are inspected)

    Returns:
        The detected ImageFormat, or None if the bytes match no signature
    """
    if len(data) < 2:
        return None

    # PNG needs its full 8-byte signature
    if len(data) >= 8 and data.startswith(b"\x89PNG"):
        return ImageFormat.PNG
    if data.startswith(b"\xff\xd8\xff"):
        return ImageFormat.JPEG
    if data.startswith(b"GIF8"):
        return ImageFormat.GIF
    if data.startswith(b"RIFF") and data[8:12] == b"WEBP":
        return ImageFormat.WEBP
    if data.startswith(b"BM"):
        return ImageFormat.BMP

    if data.startswith(b"<"):
        head = data[:SVG_SNIFF_BYTES]
        if b"<svg" in head or b"<?xml" in head:
            return ImageFormat.SVG

    return None


def is_image_data(data: bytes) -> bool:
    """Check if the bytes carry a known image signature."""
    return detect_image_type(data) is not None


def detect_image_extension(data: bytes) -> str:
    """
    Return the extension for the detected format.

    Unknown content falls back to '.png'.
    """
    fmt = detect_image_type(data)
    if fmt is None:
        return ".png"
    return fmt.extension


def is_image_file(filename: str | PurePath) -> bool:
    """Check if the filename has a supported image extension."""
    return PurePath(filename).suffix.lower() in IMAGE_EXTENSIONS


def image_dimensions(data: bytes) -> tuple[int, int]:
    """
    Best-effort pixel dimensions for log output.

    Returns (0, 0) when Pillow cannot open the data (SVG, truncated files).
    """
    try:
        from PIL import Image

        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except Exception:
        return 0, 0
