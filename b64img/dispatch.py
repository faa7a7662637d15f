"""
Input classification and dispatch.

Every input is classified into exactly one kind, checked in this order:

1. UrlInput        - http:// or https:// target
2. ImageFileInput  - path with a known image extension
3. Base64FileInput - .mime.b64 / .raw.b64, or a .b64 file that decodes to an image
4. DocumentInput   - anything else (file content or stdin), JSON or text

A name like 'photo.png.b64' is a base64 file: only the final extension
decides whether a path is an image.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Union

from b64img.config import ConvertConfig
from b64img.download import DownloadResult, Fetcher, download_image, http_get, is_url
from b64img.errors import FilesystemError
from b64img.extract import DocumentResult, PayloadSaver, process_document
from b64img.naming import FilenameSequence
from b64img.sniff import is_image_file
from b64img.transcode import DecodeResult, EncodeResult, decode_base64_file, encode_image_file, is_base64_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UrlInput:
    url: str


@dataclass(frozen=True)
class ImageFileInput:
    path: Path


@dataclass(frozen=True)
class Base64FileInput:
    path: Path


@dataclass(frozen=True)
class DocumentInput:
    data: bytes = field(repr=False)
    source: str


InputKind = Union[UrlInput, ImageFileInput, Base64FileInput, DocumentInput]


@dataclass
class UrlResult:
    """A downloaded image and the sidecars encoded from it."""

    download: DownloadResult
    encoded: EncodeResult


RunResult = Union[UrlResult, EncodeResult, DecodeResult, DocumentResult]


def classify(target: str | None, stdin: BinaryIO | None = None) -> InputKind:
    """
    Classify a command-line target.

    Args:
        target: File path or URL, or None to read standard input
        stdin: Binary stream used when target is None (default: sys.stdin.buffer)

    Returns:
        The input kind

    Raises:
        FilesystemError: If a document file or stdin cannot be read
    """
    if target is None:
        stream = stdin if stdin is not None else sys.stdin.buffer
        try:
            return DocumentInput(data=stream.read(), source="<stdin>")
        except OSError as e:
            raise FilesystemError(f"failed to read input: {e}") from e

    if is_url(target):
        return UrlInput(target)

    if is_image_file(target):
        return ImageFileInput(Path(target))

    if is_base64_file(target):
        return Base64FileInput(Path(target))

    try:
        data = Path(target).read_bytes()
    except OSError as e:
        raise FilesystemError(f"failed to read file {target}: {e}") from e
    return DocumentInput(data=data, source=target)


def run(
    kind: InputKind,
    config: ConvertConfig,
    *,
    fetch: Fetcher = http_get,
    confirm_overwrite: Callable[[Path], bool] | None = None,
    sequence: FilenameSequence | None = None,
) -> RunResult:
    """
    Execute the operation for a classified input.

    Args:
        kind: Result of classify()
        config: Run configuration
        fetch: HTTP fetcher for URL inputs
        confirm_overwrite: Overwrite prompt for decoded images
        sequence: Filename generator for extracted payloads

    Returns:
        The operation's result record

    Raises:
        B64ImgError: If the operation fails
    """
    if isinstance(kind, UrlInput):
        download = download_image(kind.url, config.output_dir, fetch=fetch, timeout=config.http_timeout)
        return UrlResult(download=download, encoded=encode_image_file(download.path, config.output_dir))

    if isinstance(kind, ImageFileInput):
        return encode_image_file(kind.path, config.output_dir)

    if isinstance(kind, Base64FileInput):
        if config.assume_yes:
            confirm_overwrite = lambda _path: True  # noqa: E731
        return decode_base64_file(kind.path, config.output_dir, confirm_overwrite=confirm_overwrite)

    if isinstance(kind, DocumentInput):
        saver = PayloadSaver(config.payload_dir(), sequence)
        result = process_document(kind.data, saver, pretty=config.pretty)
        if config.pretty and not result.is_json:
            logger.warning("--pretty flag only applies to JSON input, ignoring")
        return result

    raise TypeError(f"Unknown input kind: {kind!r}")
