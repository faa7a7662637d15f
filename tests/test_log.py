"""Tests for logging setup."""

import logging
import sys

from b64img.log import LOG_FORMAT, setup_logging


def test_handler_added_once_and_level_updated():
    logger = setup_logging("b64img", logging.WARNING)
    setup_logging("b64img", logging.DEBUG)

    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert handler.level == logging.DEBUG
    assert logger.level == logging.DEBUG
    assert handler.formatter._fmt == LOG_FORMAT
    assert not logger.propagate


def test_foreign_stream_handler_does_not_replace_ours():
    logger = logging.getLogger("b64img")
    foreign = logging.StreamHandler(sys.stdout)
    foreign.setLevel(logging.WARNING)
    logger.addHandler(foreign)

    setup_logging("b64img", logging.WARNING)

    assert len(logger.handlers) == 2
    assert logger.handlers[0] is foreign
    assert logger.handlers[1].stream is sys.stderr
