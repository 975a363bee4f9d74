"""Tests for the stdlib logging bridge"""

import io
import logging
import os
from unittest.mock import Mock

import pytest

from debug_stream import DebugStreamHandler, LogLevel, create
from debug_stream.writers.logging_handler import to_log_level


@pytest.fixture
def capture():
    out = io.StringIO()
    handler = DebugStreamHandler(create(colors=False, show_date=False, out=out))
    logger = logging.getLogger("test.debug_stream")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    yield logger, handler, out
    logger.removeHandler(handler)


class TestLevelMapping:
    """Test stdlib to LogLevel mapping."""

    @pytest.mark.parametrize("levelno, expected", [
        (5, LogLevel.TRACE),
        (logging.DEBUG, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARN),
        (logging.ERROR, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.FATAL),
    ])
    def test_to_log_level(self, levelno, expected):
        assert to_log_level(levelno) == expected


class TestDebugStreamHandler:
    """Test rendering of LogRecords."""

    def test_info_with_extra(self, capture):
        logger, _handler, out = capture
        logger.info("started %s", "now", extra={"port": 8080})

        assert out.getvalue() == f"test.debug_stream[{os.getpid()}] INFO:  started now\n  port: 8080\n"

    def test_exception(self, capture):
        logger, _handler, out = capture
        try:
            1 / 0
        except ZeroDivisionError:
            logger.exception("failed")

        lines = out.getvalue().split("\n")
        assert lines[0].endswith("ERROR: failed")
        assert lines[1] == "  err: ZeroDivisionError: division by zero"

    def test_src(self, capture):
        logger, handler, out = capture
        handler.include_src = True
        logger.warning("look here")

        assert " WARN:  " in out.getvalue()
        assert "test_src (" in out.getvalue()

    def test_record_to_entry(self, capture):
        logger, handler, _out = capture
        record = logger.makeRecord("svc", logging.DEBUG, "f.py", 3, "hello %d", (1,), None, extra={"k": "v"})
        entry = handler.record_to_entry(record)

        assert entry["level"] == LogLevel.DEBUG
        assert entry["msg"] == "hello 1"
        assert entry["name"] == "svc"
        assert entry["k"] == "v"
        assert "src" not in entry
        assert "args" not in entry

    def test_write_errors_go_to_handle_error(self, capture):
        logger, handler, _out = capture
        handler.stream = Mock()
        handler.stream.write.side_effect = OSError("disk full")
        handler.handleError = Mock()

        logger.error("lost")

        handler.handleError.assert_called_once()
