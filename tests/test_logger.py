"""Unit tests for structured logging."""
import sys
import json
import logging
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from logger import JSONFormatter, setup_logging


class TestJSONFormatter:
    """Test suite for JSONFormatter."""

    def test_basic_record(self):
        """Test the core fields of a formatted record."""
        record = logging.LogRecord("services.session", logging.INFO, __file__, 1, "Ingested %s", ("a.pdf",), None)

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "services.session"
        assert data["message"] == "Ingested a.pdf"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_are_included(self):
        """Test that fields passed via extra= appear in the JSON."""
        logger = logging.getLogger("test.extra")
        records = []
        handler = logging.Handler()
        handler.emit = records.append
        logger.addHandler(handler)
        try:
            logger.warning("Upstream error", extra={"error_code": "UPSTREAM_ERROR"})
        finally:
            logger.removeHandler(handler)

        data = json.loads(JSONFormatter().format(records[0]))
        assert data["error_code"] == "UPSTREAM_ERROR"
        assert "args" not in data

    def test_exception_info(self):
        """Test that exceptions are serialized."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]


def test_setup_logging_replaces_handlers():
    """Test that setup_logging installs exactly one JSON handler."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    try:
        setup_logging("DEBUG")
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
        assert root_logger.level == logging.DEBUG
    finally:
        root_logger.handlers = saved_handlers
        root_logger.setLevel(saved_level)
