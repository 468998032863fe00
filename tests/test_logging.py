"""Tests for logging helpers."""

import json
import logging
from logging.handlers import RotatingFileHandler

from reslock.core.config import LogConfig
from reslock.core.logging import ContextLoggerAdapter, JSONFormatter, setup_logging, with_log_context


def _record(msg="hello %s", args=("world",), **extra):
    record = logging.makeLogRecord({"name": "reslock.test", "levelname": "INFO", "msg": msg, "args": args})
    record.__dict__.update(extra)
    return record


def test_json_formatter_emits_one_object_per_record():
    payload = json.loads(JSONFormatter().format(_record(lock_store="/tmp/locks")))

    assert payload["message"] == "hello world"
    assert payload["logger"] == "reslock.test"
    assert payload["level"] == "INFO"
    assert payload["lock_store"] == "/tmp/locks"


def test_json_formatter_survives_bad_placeholders():
    payload = json.loads(JSONFormatter().format(_record(msg="%d items", args=("many",))))
    assert payload["message"].endswith("[log-message-format-error]")


def test_with_log_context_merges_fields():
    base = logging.getLogger("reslock.test.context")
    adapter = with_log_context(base, lock_store="/locks", ignored=None)
    nested = with_log_context(adapter, resource="R")

    assert isinstance(nested, ContextLoggerAdapter)
    assert nested.logger is base
    assert nested.extra == {"lock_store": "/locks", "resource": "R"}

    msg, kwargs = nested.process("message", {"extra": {"resource": "override"}})
    assert kwargs["extra"] == {"lock_store": "/locks", "resource": "override"}


def test_setup_logging_console_only():
    logger = setup_logging(LogConfig(level="warning"))

    assert logger.name == "reslock"
    assert logging.root.level == logging.WARNING
    assert len(logging.root.handlers) == 1


def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "reslock.log"
    setup_logging(LogConfig(level="DEBUG", format="json", file=str(log_file)))

    assert any(isinstance(handler, RotatingFileHandler) for handler in logging.root.handlers)
    logging.getLogger("reslock.locks").debug("Locked '%s'", "R")
    for handler in logging.root.handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["message"] == "Locked 'R'"
