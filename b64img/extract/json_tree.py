"""
JSON document extraction.

Walks a parsed JSON value and rewrites embedded images in place:

- An object with a string "mime_type" starting with "image/" and a string
  "data" field gets "data" replaced by a file reference. "mime_type" is
  left untouched. A failure here aborts the whole document.
- A string value or array element holding a Markdown data-URL image is
  replaced as a whole by `![alt](reference)`; a string that is exactly one
  data URL is replaced by the bare reference. Failures here are logged and
  skipped.
"""

from __future__ import annotations

import logging
from typing import Any

from b64img.errors import B64ImgError

from .base import DATA_URL_VALUE_RE, MARKDOWN_IMAGE_RE, PayloadSaver

logger = logging.getLogger(__name__)


def is_image_field(node: dict[str, Any]) -> bool:
    """Check for the {"mime_type": "image/...", "data": "..."} convention."""
    mime_type = node.get("mime_type")
    return (
        isinstance(mime_type, str)
        and mime_type.startswith("image/")
        and isinstance(node.get("data"), str)
    )


def rewrite_string(value: str, saver: PayloadSaver) -> str | None:
    """
    Rewrite a string holding an embedded image.

    Markdown images are tried before the bare data-URL form, since a
    wrapped data URL also satisfies the bare pattern.

    Returns:
        The replacement string, or None if the value is left as-is
    """
    match = MARKDOWN_IMAGE_RE.search(value)
    if match is not None:
        alt, mime_type, base64_data = match.groups()
        try:
            reference = saver.save(base64_data, mime_type)
        except B64ImgError as e:
            logger.warning("failed to save markdown image: %s", e)
            return None
        return f"![{alt}]({reference})"

    match = DATA_URL_VALUE_RE.fullmatch(value)
    if match is None:
        return None

    mime_type, base64_data = match.groups()
    try:
        return saver.save(base64_data, mime_type)
    except B64ImgError as e:
        logger.warning("failed to save data URL image: %s", e)
        return None


def process_json_tree(node: Any, saver: PayloadSaver) -> None:
    """
    Recursively extract images from a parsed JSON value, mutating it in place.

    Raises:
        B64ImgError: If an image field's data cannot be decoded or saved
    """
    if isinstance(node, dict):
        if is_image_field(node):
            node["data"] = saver.save(node["data"], node["mime_type"])

        for key, value in list(node.items()):
            if isinstance(value, str):
                rewritten = rewrite_string(value, saver)
                if rewritten is not None:
                    node[key] = rewritten
                continue
            process_json_tree(value, saver)

    elif isinstance(node, list):
        for index, item in enumerate(node):
            if isinstance(item, str):
                rewritten = rewrite_string(item, saver)
                if rewritten is not None:
                    node[index] = rewritten
                continue
            process_json_tree(item, saver)
