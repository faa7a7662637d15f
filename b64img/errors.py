"""Exceptions raised by b64img operations."""

from __future__ import annotations


class B64ImgError(Exception):
    """Base exception for conversion failures."""

    pass


class MalformedBase64Error(B64ImgError):
    """Raised when text is not valid standard-alphabet base64."""

    pass


class UnrecognizedContentError(B64ImgError):
    """Raised when content does not sniff as an image where one is required."""

    pass


class FilesystemError(B64ImgError):
    """Raised when reading, writing or creating a directory fails."""

    pass


class NetworkError(B64ImgError):
    """Raised when a download fails or returns a non-200 status."""

    pass


class FormatError(B64ImgError):
    """Raised when a sidecar file's framing cannot be parsed."""

    pass
