"""Tests for JSON document extraction."""

import json
import logging

import pytest

from b64img.errors import MalformedBase64Error
from b64img.extract import PayloadSaver, dump_json, process_document, process_json_tree

from .conftest import FROZEN_PREFIX, GIF_BYTES, JPEG_BYTES, PNG_BYTES, b64


@pytest.fixture
def saver(tmp_path, frozen_sequence):
    return PayloadSaver(tmp_path / "decoded", frozen_sequence)


def test_image_field_and_data_url_both_rewritten(saver, tmp_path):
    document = {
        "id": 7,
        "message": {
            "role": "user",
            "mime_type": "image/png",
            "data": b64(PNG_BYTES),
            "score": 1.5,
        },
        "thumbnail": f"data:image/jpeg;base64,{b64(JPEG_BYTES)}",
        "tags": ["a", None, True],
    }
    raw = json.dumps(document).encode()

    result = process_document(raw, saver)

    expected = {
        "id": 7,
        "message": {
            "role": "user",
            "mime_type": "image/png",
            "data": f"decoded/{FROZEN_PREFIX}_1.png",
            "score": 1.5,
        },
        "thumbnail": f"decoded/{FROZEN_PREFIX}_2.jpg",
        "tags": ["a", None, True],
    }
    assert result.is_json
    assert result.text == json.dumps(expected, separators=(",", ":"))
    assert list(json.loads(result.text)["message"]) == ["role", "mime_type", "data", "score"]
    assert (tmp_path / "decoded" / f"{FROZEN_PREFIX}_1.png").read_bytes() == PNG_BYTES
    assert (tmp_path / "decoded" / f"{FROZEN_PREFIX}_2.jpg").read_bytes() == JPEG_BYTES


def test_array_elements_rewritten(saver):
    tree = [f"data:image/gif;base64,{b64(GIF_BYTES)}", "plain", [{"x": 1}]]

    process_json_tree(tree, saver)

    assert tree == [f"decoded/{FROZEN_PREFIX}_1.gif", "plain", [{"x": 1}]]


def test_markdown_string_replaced_as_a_whole(saver):
    tree = {"content": f"look ![chart](data:image/png;base64,{b64(PNG_BYTES)}) here"}

    process_json_tree(tree, saver)

    assert tree == {"content": f"![chart](decoded/{FROZEN_PREFIX}_1.png)"}


def test_markdown_string_ignores_trailing_data_url(saver, tmp_path):
    value = (
        f"![m](data:image/png;base64,{b64(PNG_BYTES)}) x "
        f"data:image/gif;base64,{b64(GIF_BYTES)}"
    )
    tree = {"a": f"x data:image/gif;base64,{b64(GIF_BYTES)}", "b": value}

    process_json_tree(tree, saver)

    assert tree["a"] == f"x data:image/gif;base64,{b64(GIF_BYTES)}"
    assert tree["b"] == f"![m](decoded/{FROZEN_PREFIX}_1.png)"
    assert sorted(p.name for p in (tmp_path / "decoded").iterdir()) == [f"{FROZEN_PREFIX}_1.png"]


def test_failed_markdown_string_left_unchanged(saver, caplog):
    value = "see ![x](data:image/png;base64,-_-_) there"
    tree = [value]

    with caplog.at_level(logging.WARNING, logger="b64img"):
        process_json_tree(tree, saver)

    assert tree == [value]
    assert "failed to save markdown image" in caplog.text


def test_data_url_must_span_whole_string(saver):
    value = f"prefix data:image/png;base64,{b64(PNG_BYTES)}"
    tree = {"note": value}

    process_json_tree(tree, saver)

    assert tree == {"note": value}


def test_non_image_mime_type_ignored(saver):
    tree = {"mime_type": "application/pdf", "data": "JVBERi0="}

    process_json_tree(tree, saver)

    assert tree == {"mime_type": "application/pdf", "data": "JVBERi0="}


def test_malformed_image_field_is_fatal(saver):
    raw = json.dumps({"items": [{"mime_type": "image/png", "data": "not-base64!"}]}).encode()

    with pytest.raises(MalformedBase64Error):
        process_document(raw, saver)


def test_malformed_data_url_string_is_skipped(saver, caplog):
    tree = {"a": "data:image/png;base64,-_-_", "b": f"data:image/png;base64,{b64(PNG_BYTES)}"}

    with caplog.at_level(logging.WARNING, logger="b64img"):
        process_json_tree(tree, saver)

    assert tree["a"] == "data:image/png;base64,-_-_"
    assert tree["b"] == f"decoded/{FROZEN_PREFIX}_1.png"
    assert "failed to save data URL image" in caplog.text


def test_non_json_falls_back_to_text(saver):
    raw = f"![x](data:image/png;base64,{b64(PNG_BYTES)})".encode()

    result = process_document(raw, saver)

    assert not result.is_json
    assert result.text == f"![x](decoded/{FROZEN_PREFIX}_1.png)"


def test_pretty_output_is_indented(saver):
    result = process_document(b'{"a": [1, 2], "b": "\xc3\xa9"}', saver, pretty=True)

    assert result.text == '{\n  "a": [\n    1,\n    2\n  ],\n  "b": "é"\n}'


def test_dump_json_compact_keeps_unicode():
    assert dump_json({"k": "é", "n": [1]}) == '{"k":"é","n":[1]}'


@pytest.mark.parametrize("raw", [b'{"a": NaN}', b"[Infinity, 1]", b"-Infinity"])
def test_non_standard_json_constants_processed_as_text(saver, raw):
    result = process_document(raw, saver)

    assert not result.is_json
    assert result.text == raw.decode()
