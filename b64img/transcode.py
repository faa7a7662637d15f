"""
Image file <-> base64 sidecar transcoding.

Encoding writes two sidecars next to the image (or into an output
directory):

    cat.png  ->  cat.raw.b64   iVBORw0KGgo...
                 cat.mime.b64  image/png;base64,iVBORw0KGgo...

Decoding reverses either sidecar (or a generic .b64 file) into an image,
resolving the extension from the MIME header and the decoded content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from b64img import codec
from b64img.errors import FilesystemError, FormatError, MalformedBase64Error
from b64img.naming import extension_from_mime, mime_from_extension, numbered_fallback
from b64img.sniff import detect_image_extension, image_dimensions, is_image_data

logger = logging.getLogger(__name__)

RAW_SUFFIX = ".raw.b64"
MIME_SUFFIX = ".mime.b64"
GENERIC_SUFFIX = ".b64"

MIME_SEPARATOR = ";base64,"

# Payload characters decoded when probing a generic .b64 file
PROBE_SAMPLE_SIZE = 4096


@dataclass
class EncodeResult:
    """Sidecar files written for an image."""

    raw_path: Path
    mime_path: Path
    mime_type: str


@dataclass
class DecodeResult:
    """Image file written from a sidecar."""

    path: Path
    extension: str
    size: int


def _read_bytes(path: Path, what: str) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FilesystemError(f"failed to read {what}: {e}") from e


def _write(path: Path, data: bytes, what: str) -> None:
    try:
        path.write_bytes(data)
    except OSError as e:
        raise FilesystemError(f"failed to write {what}: {e}") from e


def _ensure_dir(directory: Path) -> None:
    try:
        directory.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"failed to create output directory: {e}") from e


def encode_image_file(path: str | Path, output_dir: str | Path | None = None) -> EncodeResult:
    """
    Encode an image file into .raw.b64 and .mime.b64 sidecars.

    The MIME type comes from the file extension, not the content. The
    source file is not modified.

    Args:
        path: Image file to encode
        output_dir: Directory for the sidecars (default: the image's directory)

    Returns:
        EncodeResult with both sidecar paths

    Raises:
        FilesystemError: If the image cannot be read or a sidecar cannot be written
    """
    path = Path(path)
    image_data = _read_bytes(path, "image file")
    payload = codec.encode(image_data)
    mime_type = mime_from_extension(path.name)

    if output_dir is not None:
        directory = Path(output_dir)
        _ensure_dir(directory)
    else:
        directory = path.parent

    raw_path = directory / f"{path.stem}{RAW_SUFFIX}"
    mime_path = directory / f"{path.stem}{MIME_SUFFIX}"

    _write(raw_path, payload.encode("ascii"), "raw.b64 file")
    _write(mime_path, f"{mime_type}{MIME_SEPARATOR}{payload}".encode("ascii"), "mime.b64 file")

    width, height = image_dimensions(image_data)
    logger.info("Encoded %s (%s, %dx%d, %d bytes)", path, mime_type, width, height, len(image_data))
    return EncodeResult(raw_path=raw_path, mime_path=mime_path, mime_type=mime_type)


def strip_base64_suffix(filename: str) -> str:
    """Remove the .mime.b64, .raw.b64 or .b64 suffix from a filename."""
    for suffix in (MIME_SUFFIX, RAW_SUFFIX, GENERIC_SUFFIX):
        if filename.endswith(suffix):
            return filename[: -len(suffix)]
    return filename


def parse_sidecar(filename: str, content: str) -> tuple[str, str]:
    """
    Split sidecar content into its payload and provisional extension.

    The extension is '' when nothing is known yet (a generic .b64 file
    without a MIME header).

    Returns:
        (base64_data, extension)

    Raises:
        FormatError: If a .mime.b64 file lacks the ';base64,' separator
    """
    if filename.endswith(MIME_SUFFIX):
        parts = content.split(MIME_SEPARATOR, 1)
        if len(parts) != 2:
            raise FormatError("invalid mime.b64 format: expected 'mime_type;base64,data'")
        mime_type, base64_data = parts
        return base64_data, extension_from_mime(mime_type)

    if filename.endswith(RAW_SUFFIX):
        return content, ".png"

    if MIME_SEPARATOR in content:
        mime_type, base64_data = content.split(MIME_SEPARATOR, 1)
        return base64_data, extension_from_mime(mime_type)

    return content, ""


def resolve_extension(ext: str, image_data: bytes) -> str:
    """
    Pick the final extension for decoded bytes.

    Only an unknown or '.png' extension is re-checked against the content:
    a sniffed format wins over '.png', and an unknown extension takes the
    sniffed one (which itself falls back to '.png').
    """
    if ext in ("", ".png"):
        detected = detect_image_extension(image_data)
        if detected != ".png" or ext == "":
            return detected
    return ext


def decode_base64_file(
    path: str | Path,
    output_dir: str | Path | None = None,
    *,
    confirm_overwrite: Callable[[Path], bool] | None = None,
) -> DecodeResult:
    """
    Decode a .b64 sidecar back into an image file.

    Args:
        path: .mime.b64, .raw.b64 or generic .b64 file
        output_dir: Directory for the image (default: the sidecar's directory)
        confirm_overwrite: Called with the target path when it already exists;
            returning False writes to a numbered name instead. When omitted,
            existing files are never overwritten.

    Returns:
        DecodeResult with the written path

    Raises:
        FormatError: If a .mime.b64 file is malformed
        MalformedBase64Error: If the payload is not valid base64
        FilesystemError: If reading or writing fails
    """
    path = Path(path)
    content = _read_bytes(path, "base64 file").decode("utf-8", errors="replace")

    base64_data, ext = parse_sidecar(path.name, content)
    image_data = codec.decode(base64_data)
    ext = resolve_extension(ext, image_data)

    base_name = strip_base64_suffix(path.name) + ext
    if output_dir is not None:
        directory = Path(output_dir)
        _ensure_dir(directory)
    else:
        directory = path.parent
    output_path = directory / base_name

    if output_path.exists():
        if confirm_overwrite is None or not confirm_overwrite(output_path):
            output_path = numbered_fallback(output_path)

    _write(output_path, image_data, "image file")

    width, height = image_dimensions(image_data)
    logger.info("Decoded %s (%s, %dx%d, %d bytes)", output_path, ext, width, height, len(image_data))
    return DecodeResult(path=output_path, extension=ext, size=len(image_data))


def is_base64_file(path: str | Path) -> bool:
    """
    Check if a file holds a base64-encoded image.

    .mime.b64 and .raw.b64 are accepted by name. A generic .b64 file is
    accepted when the first 4096 payload characters decode to bytes with
    an image signature; corruption past the sample is only caught by the
    full decode.
    """
    name = Path(path).name
    if name.endswith((MIME_SUFFIX, RAW_SUFFIX)):
        return True
    if not name.endswith(GENERIC_SUFFIX):
        return False

    try:
        content = Path(path).read_bytes().decode("utf-8", errors="replace")
    except OSError:
        return False

    if MIME_SEPARATOR in content:
        content = content.split(MIME_SEPARATOR, 1)[1]
    sample = content.replace("\r", "").replace("\n", "")[:PROBE_SAMPLE_SIZE]

    try:
        decoded = codec.decode(sample)
    except MalformedBase64Error:
        return False
    return is_image_data(decoded)
