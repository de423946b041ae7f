"""Structured logging tests — JSON output, bound context, setup idempotency."""

import json
import logging

from kbchat.infrastructure.observability import (
    JSONFormatter,
    bind_logger,
    log_business_event,
    log_security_event,
    setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("kbchat.test", logging.INFO, __file__, 1, "hello", None, None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "kbchat.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload


def test_json_formatter_surfaces_context_fields_only_when_set():
    payload = json.loads(JSONFormatter().format(
        _record(conversation_id="c-1", request_id="r-1", unrelated="x"),
    ))
    assert payload["conversation_id"] == "c-1"
    assert payload["request_id"] == "r-1"
    assert "unrelated" not in payload
    assert "operation" not in payload


def test_bind_logger_merges_context(caplog):
    log = bind_logger(logging.getLogger("kbchat.test"), request_id="r-1")
    child = log.bind(conversation_id="c-1")
    with caplog.at_level(logging.INFO, logger="kbchat.test"):
        child.info("renamed", extra={"operation": "rename"})
    record = caplog.records[-1]
    assert record.request_id == "r-1"
    assert record.conversation_id == "c-1"
    assert record.operation == "rename"
    # parent keeps its own context
    assert "conversation_id" not in log.extra


def test_bind_logger_on_bound_logger_returns_child():
    log = bind_logger(logging.getLogger("kbchat.test"), request_id="r-1")
    child = bind_logger(log, operation="x")
    assert child.extra == {"request_id": "r-1", "operation": "x"}


def test_event_helpers(caplog):
    log = logging.getLogger("kbchat.test")
    with caplog.at_level(logging.INFO, logger="kbchat.test"):
        log_business_event(log, "new_conversation_started", conversation_id="c-1")
        log_security_event(log, "unknown_conversation_rename_attempt")
    business, security = caplog.records[-2:]
    assert business.event_type == "business"
    assert business.event == "new_conversation_started"
    assert business.levelno == logging.INFO
    assert security.event_type == "security"
    assert security.levelno == logging.WARNING


def test_setup_logging_does_not_stack_handlers():
    before = len(logging.root.handlers)
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    named = [h for h in logging.root.handlers if h.get_name() == "kbchat"]
    assert len(named) == 1
    assert len(logging.root.handlers) <= before + 1
    assert logging.root.level == logging.INFO
    logging.root.removeHandler(named[0])


def test_json_formatter_surfaces_recognized_opener():
    payload = json.loads(JSONFormatter().format(_record(opener="how to")))
    assert payload["opener"] == "how to"
