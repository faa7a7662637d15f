"""
Markdown and plain-text extraction.

Finds embedded base64 images in free text and replaces each with a
reference to a file written by the PayloadSaver:

    ![alt](data:image/png;base64,...)  ->  ![alt](decoded/<name>.png)
    data:image/png;base64,...           ->  decoded/<name>.png

Matches are collected first and the output is built once. Bare data URLs
that overlap a Markdown match are not considered, whether or not the
Markdown save succeeded. A failed save keeps the original text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from b64img.errors import B64ImgError

from .base import DATA_URL_RE, MARKDOWN_IMAGE_RE, PayloadSaver

logger = logging.getLogger(__name__)


@dataclass
class Replacement:
    """A span of the input text and what to put in its place."""

    start: int
    end: int
    text: str


def _overlaps(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < span_end and span_start < end for span_start, span_end in spans)


def find_replacements(text: str, saver: PayloadSaver) -> list[Replacement]:
    """
    Scan text for embedded images and save each payload.

    Returns:
        Successful replacements ordered by position
    """
    replacements: list[Replacement] = []
    markdown_spans: list[tuple[int, int]] = []

    for match in MARKDOWN_IMAGE_RE.finditer(text):
        markdown_spans.append(match.span())
        alt_text, mime_type, base64_data = match.groups()
        try:
            reference = saver.save(base64_data, mime_type)
        except B64ImgError as e:
            logger.warning("failed to save markdown image: %s", e)
            continue
        replacements.append(Replacement(match.start(), match.end(), f"![{alt_text}]({reference})"))

    for match in DATA_URL_RE.finditer(text):
        if _overlaps(match.start(), match.end(), markdown_spans):
            continue
        mime_type, base64_data = match.groups()
        try:
            reference = saver.save(base64_data, mime_type)
        except B64ImgError as e:
            logger.warning("failed to save data URL image: %s", e)
            continue
        replacements.append(Replacement(match.start(), match.end(), reference))

    replacements.sort(key=lambda r: r.start)
    return replacements


def apply_replacements(text: str, replacements: list[Replacement]) -> str:
    """Build the output text from non-overlapping, position-ordered replacements."""
    parts: list[str] = []
    cursor = 0
    for replacement in replacements:
        parts.append(text[cursor : replacement.start])
        parts.append(replacement.text)
        cursor = replacement.end
    parts.append(text[cursor:])
    return "".join(parts)


def process_text(text: str, saver: PayloadSaver) -> str:
    """
    Replace every embedded base64 image in text with a file reference.

    Args:
        text: Markdown or plain text
        saver: Destination for decoded payloads

    Returns:
        The rewritten text (unchanged where nothing matched or saving failed)
    """
    return apply_replacements(text, find_replacements(text, saver))
