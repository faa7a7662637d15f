"""Extraction of base64 images embedded in JSON, Markdown and plain text."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from .base import DATA_URL_RE, MARKDOWN_IMAGE_RE, PayloadSaver
from .json_tree import process_json_tree
from .text import process_text


@dataclass
class DocumentResult:
    """Result of processing a JSON or text document."""

    text: str
    is_json: bool
    saved: list[Path] = field(default_factory=list)


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON constant: {name}")


def dump_json(value: object, pretty: bool = False) -> str:
    """Serialize JSON compactly, or with two-space indentation."""
    if pretty:
        return json.dumps(value, indent=2, ensure_ascii=False)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def process_document(data: bytes, saver: PayloadSaver, *, pretty: bool = False) -> DocumentResult:
    """
    Extract embedded images from a document.

    Content that parses as JSON is walked as a tree and re-serialized.
    Anything else is treated as Markdown/plain text.

    Args:
        data: Raw document bytes
        saver: Destination for decoded payloads
        pretty: Indent JSON output

    Returns:
        DocumentResult with the rewritten document

    Raises:
        B64ImgError: If a JSON image field cannot be decoded or saved
    """
    try:
        tree = json.loads(data, parse_constant=_reject_constant)
    except ValueError:
        text = data.decode("utf-8", errors="surrogateescape")
        return DocumentResult(text=process_text(text, saver), is_json=False, saved=saver.saved)

    process_json_tree(tree, saver)
    return DocumentResult(text=dump_json(tree, pretty), is_json=True, saved=saver.saved)


__all__ = [
    "DATA_URL_RE",
    "MARKDOWN_IMAGE_RE",
    "DocumentResult",
    "PayloadSaver",
    "dump_json",
    "process_document",
    "process_json_tree",
    "process_text",
]
