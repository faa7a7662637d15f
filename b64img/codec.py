"""Standard-alphabet base64 encoding and decoding."""

from __future__ import annotations

import base64
import binascii

from .errors import MalformedBase64Error


def encode(data: bytes) -> str:
    """Encode bytes as padded standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """
    Decode standard base64 text.

    Line breaks are ignored. Any other character outside the standard
    alphabet (including URL-safe '-' and '_') or bad padding is rejected.

    Raises:
        MalformedBase64Error: If the text is not valid base64
    """
    cleaned = text.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedBase64Error(f"failed to decode base64: {e}") from e
