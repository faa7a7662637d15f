"""Shared test fixtures and sample image bytes."""

import base64
import logging
from datetime import datetime

import pytest

from b64img.naming import FilenameSequence

# =============================================================================
# Sample images (signature + filler, enough for sniffing)
# =============================================================================

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + bytes(range(32))
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(range(40))
GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x80\x00\x00" + bytes(range(16))
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + bytes(range(24))
BMP_BYTES = b"BM\x3a\x00\x00\x00\x00\x00\x00\x00\x36\x00" + bytes(range(24))
SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"></svg>'


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


FROZEN_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000)
FROZEN_PREFIX = "20240102030405678"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def frozen_sequence() -> FilenameSequence:
    """Filename sequence whose clock never advances."""
    return FilenameSequence(clock=lambda: FROZEN_NOW)


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_b64img_logger():
    """Undo handlers and propagation changes made by setup_logging."""
    logger = logging.getLogger("b64img")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
