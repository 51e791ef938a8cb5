"""Tests for log formatting and setup."""

from __future__ import annotations

import io
import json
import logging
import sys

from caseforge.logs import HumanReadableFormatter, StructuredFormatter, setup_logging


def make_record(message: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("caseforge.test", level, __file__, 10, message, (), None)


class TestStructuredFormatter:
    def test_json_fields(self):
        data = json.loads(StructuredFormatter().format(make_record("generated 4 cases")))
        assert data["message"] == "generated 4 cases"
        assert data["level"] == "info"
        assert data["logger"] == "caseforge.test"
        assert "timestamp" in data
        assert "location" not in data

    def test_location_and_extra_fields(self):
        formatter = StructuredFormatter(include_location=True, extra_fields={"run": "r1"})
        data = json.loads(formatter.format(make_record()))
        assert data["location"]["line"] == 10
        assert data["run"] == "r1"

    def test_exception(self):
        try:
            raise ValueError("bad step")
        except ValueError:
            record = logging.LogRecord(
                "caseforge.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        data = json.loads(StructuredFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad step"


class TestHumanReadableFormatter:
    def test_plain_output(self):
        line = HumanReadableFormatter(use_colors=False).format(make_record("resolved"))
        assert "INFO" in line
        assert "[caseforge.test] resolved" in line
        assert "\033[" not in line


class TestSetupLogging:
    def test_routes_caseforge_logs(self):
        stream = io.StringIO()
        setup_logging("DEBUG", json_format=True, stream=stream)
        logging.getLogger("caseforge.combinatorial").debug("resolved domain")
        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "resolved domain"
        assert data["level"] == "debug"

    def test_respects_level(self):
        stream = io.StringIO()
        setup_logging(logging.WARNING, stream=stream)
        logging.getLogger("caseforge.combinatorial").info("hidden")
        assert stream.getvalue() == ""

    def test_repeated_setup_replaces_handler(self):
        setup_logging("INFO", stream=io.StringIO())
        setup_logging("INFO", stream=io.StringIO())
        logger = logging.getLogger("caseforge")
        installed = [h for h in logger.handlers if getattr(h, "_caseforge_handler", False)]
        assert len(installed) == 1
