"""Shared patterns and payload saving for container extraction."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from b64img import codec
from b64img.errors import FilesystemError
from b64img.naming import FilenameSequence, extension_from_mime

logger = logging.getLogger(__name__)

# ![alt](data:image/png;base64,...)
MARKDOWN_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(data:(image/[^;]+);base64,([^)]+)\)")

# data:image/png;base64,... anywhere in text
DATA_URL_RE = re.compile(r"data:(image/[^;]+);base64,([A-Za-z0-9+/=]+)")

# A string value that is exactly one data URL
DATA_URL_VALUE_RE = re.compile(r"data:(image/[^;]+);base64,(.+)")


class PayloadSaver:
    """
    Decodes base64 payloads and writes them under one directory.

    Each save gets a fresh name from the sequence and returns a reference
    of the form '<dir-name>/<filename>' suitable for Markdown or JSON.

    Usage:
        saver = PayloadSaver(Path("decoded"))
        ref = saver.save("iVBORw0KGgo...", "image/png")  # 'decoded/2024..._1.png'
    """

    def __init__(self, output_dir: str | Path, sequence: FilenameSequence | None = None) -> None:
        self.output_dir = Path(output_dir)
        self.sequence = sequence or FilenameSequence()
        self.saved: list[Path] = []

    def save(self, base64_data: str, mime_type: str) -> str:
        """
        Decode a payload, write it to disk and return its reference.

        Raises:
            MalformedBase64Error: If the payload is not valid base64
            FilesystemError: If the directory or file cannot be written
        """
        image_data = codec.decode(base64_data)
        filename = self.sequence.next_name(extension_from_mime(mime_type))

        try:
            self.output_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"failed to create output directory: {e}") from e

        full_path = self.output_dir / filename
        try:
            full_path.write_bytes(image_data)
        except OSError as e:
            raise FilesystemError(f"failed to write file: {e}") from e

        self.saved.append(full_path)
        logger.info("Saved %d bytes to %s", len(image_data), full_path)
        return self.reference(filename)

    def reference(self, filename: str) -> str:
        """Relative reference for a file saved in the output directory."""
        dir_name = self.output_dir.name
        if not dir_name:
            return filename
        return f"{dir_name}/{filename}"
