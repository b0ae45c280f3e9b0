"""Tests for structured logging."""

import json
import logging
import sys

from receptionist.logging_config import JSONFormatter, get_logger, log_context, setup_logging


def make_record(message="hello %s", args=("world",), exc_info=None, **extra):
    record = logging.LogRecord(
        name="receptionist.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=args,
        exc_info=exc_info,
        func="handler",
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        """Test that the record is rendered as one JSON object."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "receptionist.test"
        assert data["message"] == "hello world"
        assert data["function"] == "handler"
        assert data["line"] == 10
        assert "timestamp" in data
        assert "exception" not in data

    def test_context_included(self):
        """Test that extra context is carried into the output."""
        record = make_record(context={"task_id": "t1", "skill_id": "echo"})
        data = json.loads(JSONFormatter().format(record))
        assert data["context"] == {"task_id": "t1", "skill_id": "echo"}

    def test_exception_included(self):
        """Test that exception info is formatted."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]

    def test_non_serializable_context(self):
        """Test that unknown objects fall back to str()."""
        record = make_record(context={"obj": object()})
        data = json.loads(JSONFormatter().format(record))
        assert data["context"]["obj"].startswith("<object object")

    def test_bound_context_merged(self):
        """Test that log_context fields are merged with per-call context."""
        with log_context(task_id="t1"):
            record = make_record(context={"state": "completed"})
            data = json.loads(JSONFormatter().format(record))

        assert data["context"] == {"task_id": "t1", "state": "completed"}

    def test_bound_context_reset(self):
        """Test that bound fields are dropped after the block."""
        with log_context(task_id="t1"):
            with log_context(skill_id="echo"):
                inner = json.loads(JSONFormatter().format(make_record()))
            outer = json.loads(JSONFormatter().format(make_record()))
        after = json.loads(JSONFormatter().format(make_record()))

        assert inner["context"] == {"task_id": "t1", "skill_id": "echo"}
        assert outer["context"] == {"task_id": "t1"}
        assert "context" not in after


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_json_to_file(self, tmp_path):
        """Test that configured logging writes JSON lines to the file."""
        log_file = tmp_path / "logs" / "app.log"
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("debug", str(log_file))
            get_logger("receptionist.setup").info("configured %d", 1)
            for handler in root.handlers:
                handler.flush()

            assert root.level == logging.DEBUG
            lines = log_file.read_text(encoding="utf-8").splitlines()
            assert json.loads(lines[-1])["message"] == "configured 1"
        finally:
            for handler in root.handlers:
                if handler not in saved_handlers:
                    handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)

    def test_file_only_and_quiet_libraries(self, tmp_path):
        """Test console=False and the WARNING floor for chatty libraries."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("info", str(tmp_path / "app.log"), console=False)

            assert [type(h).__name__ for h in root.handlers] == ["RotatingFileHandler"]
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            for handler in root.handlers:
                if handler not in saved_handlers:
                    handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)
