"""
Remote image download.

Fetches an http(s) URL, checks the content is an image, and saves it
under a name taken from the URL path so it can be encoded like any local
image file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import urlopen

from b64img.errors import FilesystemError, NetworkError, UnrecognizedContentError
from b64img.sniff import detect_image_extension, is_image_data, is_image_file

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_NAME = "downloaded_image"

# (url, timeout) -> response body
Fetcher = Callable[[str, float], bytes]


@dataclass
class DownloadResult:
    """A downloaded image saved to disk."""

    path: Path
    size: int
    extension: str


def is_url(value: str) -> bool:
    """Check if the value is an http or https URL."""
    try:
        return urlparse(value).scheme in ("http", "https")
    except ValueError:
        return False


def http_get(url: str, timeout: float = 30.0) -> bytes:
    """
    Download a URL and return the response body.

    Raises:
        NetworkError: On transport failure or a non-200 response
    """
    try:
        with urlopen(url, timeout=timeout) as response:
            if response.status != 200:
                raise NetworkError(f"HTTP request failed with status: {response.status} {response.reason}")
            return response.read()
    except HTTPError as e:
        raise NetworkError(f"HTTP request failed with status: {e.code} {e.reason}") from e
    except (URLError, OSError) as e:
        raise NetworkError(f"failed to download file: {e}") from e


def download_filename(url: str, data: bytes) -> str:
    """
    Choose a local filename for downloaded image bytes.

    The URL's last path component is kept when it has an image extension,
    with the extension corrected to match the content. Otherwise the name
    is 'downloaded_image' plus the detected extension.
    """
    detected_ext = detect_image_extension(data)
    name = PurePosixPath(urlparse(url).path).name

    if not name or not is_image_file(name):
        return f"{DEFAULT_DOWNLOAD_NAME}{detected_ext}"

    current = PurePosixPath(name)
    if current.suffix.lower() != detected_ext:
        return f"{current.stem}{detected_ext}"
    return name


def download_image(
    url: str,
    output_dir: str | Path | None = None,
    *,
    fetch: Fetcher = http_get,
    timeout: float = 30.0,
) -> DownloadResult:
    """
    Download an image and save it locally.

    Args:
        url: http(s) URL of the image
        output_dir: Directory for the saved file (default: current directory)
        fetch: Function returning the response body for a URL
        timeout: Download timeout in seconds

    Returns:
        DownloadResult for the saved file

    Raises:
        NetworkError: If the download fails
        UnrecognizedContentError: If the content is not a recognized image
        FilesystemError: If the file cannot be written
    """
    logger.info("Downloading from URL: %s", url)
    data = fetch(url, timeout)

    if not is_image_data(data):
        raise UnrecognizedContentError("downloaded content is not a valid image")

    extension = detect_image_extension(data)
    logger.info("Downloaded %d bytes, detected as %s", len(data), extension)

    directory = Path(output_dir) if output_dir is not None else Path.cwd()
    try:
        directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        image_path = directory / download_filename(url, data)
        image_path.write_bytes(data)
    except OSError as e:
        raise FilesystemError(f"failed to save original image: {e}") from e

    logger.info("Saved original image: %s", image_path)
    return DownloadResult(path=image_path, size=len(data), extension=extension)
