"""Structured Logging — JSON formatter fields and setup idempotence."""

import json
import logging

from tasktrack.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "tasktrack.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "tasktrack.test"
    assert out["message"] == "hello world"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(task_id="abc", tool_name="read_tasks", unrelated="x"),
    ))
    assert out["task_id"] == "abc"
    assert out["tool_name"] == "read_tasks"
    assert "unrelated" not in out


def test_setup_logging_does_not_stack_handlers():
    saved_handlers = list(logging.root.handlers)
    saved_level = logging.root.level
    try:
        setup_logging("DEBUG", "text")
        setup_logging("DEBUG", "json")
        assert logging.root.level == logging.DEBUG
        named = [h for h in logging.root.handlers if h.get_name() == "tasktrack"]
        assert len(named) == 1
        assert isinstance(named[0].formatter, JSONFormatter)
    finally:
        logging.root.handlers[:] = saved_handlers
        logging.root.setLevel(saved_level)
