"""Output filename policy.

Maps MIME types to extensions and back, and generates names for
decoded payloads.
"""

from __future__ import annotations

import itertools
import threading
from datetime import datetime
from pathlib import Path, PurePath
from typing import Callable

# Substring checks in precedence order
MIME_EXTENSIONS: list[tuple[tuple[str, ...], str]] = [
    (("jpeg", "jpg"), ".jpg"),
    (("png",), ".png"),
    (("gif",), ".gif"),
    (("webp",), ".webp"),
    (("bmp",), ".bmp"),
    (("svg",), ".svg"),
]

EXTENSION_MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
}

DEFAULT_EXTENSION = ".png"
DEFAULT_MIME_TYPE = "image/png"


def extension_from_mime(mime_type: str) -> str:
    """Derive a file extension from a MIME type string, defaulting to '.png'."""
    for needles, ext in MIME_EXTENSIONS:
        if any(needle in mime_type for needle in needles):
            return ext
    return DEFAULT_EXTENSION


def mime_from_extension(filename: str | PurePath) -> str:
    """
    Derive a MIME type from a filename or bare extension.

    Accepts 'photo.JPG', '.jpg' or 'jpg'. Unknown extensions map to 'image/png'.
    """
    name = str(filename)
    suffix = PurePath(name).suffix or name
    if not suffix.startswith("."):
        suffix = "." + suffix
    return EXTENSION_MIME_TYPES.get(suffix.lower(), DEFAULT_MIME_TYPE)


class FilenameSequence:
    """
    Generates unique output filenames for one run.

    Names have the form '<YYYYMMDDHHMMSS><millis>_<counter><ext>'. The
    counter starts at 1 and keeps names distinct when the clock does not
    advance between calls. It is not persisted across runs.

    Usage:
        sequence = FilenameSequence()
        sequence.next_name(".png")  # '20240101120000123_1.png'
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def next_name(self, ext: str) -> str:
        """Return the next filename with the given extension."""
        now = self._clock()
        with self._lock:
            counter = next(self._counter)
        timestamp = now.strftime("%Y%m%d%H%M%S")
        millis = now.microsecond // 1000
        return f"{timestamp}{millis:03d}_{counter}{ext}"


def numbered_fallback(path: str | Path) -> Path:
    """
    Find the first free numbered variant of a path.

    'out/cat.png' probes 'out/cat.1.png', 'out/cat.2.png', ... and returns
    the first one that does not exist.
    """
    path = Path(path)
    stem, suffix = path.stem, path.suffix
    n = 1
    candidate = path.with_name(f"{stem}.{n}{suffix}")
    while candidate.exists():
        n += 1
        candidate = path.with_name(f"{stem}.{n}{suffix}")
    return candidate
