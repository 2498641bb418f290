import json
import logging

from nbinputs.observability import configure_logging, counter, event, safe_redact, structured_log


def test_safe_redact_drops_payload_keys():
    cleaned = safe_redact({"id": "abc", "value": "secret", "data": b"x", "default": 1, "token": "t"})
    assert cleaned == {"id": "abc"}


def test_structured_log_emits_compact_json(caplog):
    caplog.set_level(logging.INFO, logger="nbinputs")
    structured_log({"event": "x", "value": "hidden", "n": 1})
    line = caplog.records[-1].getMessage()
    assert json.loads(line) == {"event": "x", "n": 1}
    assert " " not in line


def test_counter_keeps_its_numeric_value(caplog):
    caplog.set_level(logging.INFO, logger="nbinputs")
    counter("bridge.request", labels={"operation": "generate_token", "outcome": "ok"})
    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["value"] == 1
    assert payload["labels"]["outcome"] == "ok"


def test_event_fields_are_redacted(caplog):
    caplog.set_level(logging.INFO, logger="nbinputs")
    event("input.created", {"kind": "text", "default": "hidden"})
    payload = json.loads(caplog.records[-1].getMessage())
    assert payload == {"type": "event", "name": "input.created", "fields": {"kind": "text"}}


def test_structured_log_never_raises():
    structured_log({"bad": object()})
    structured_log(None)  # type: ignore[arg-type]


def test_configure_logging_uses_settings_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    pkg_logger = logging.getLogger("nbinputs")
    previous_handlers = list(pkg_logger.handlers)
    try:
        configure_logging()
        assert pkg_logger.level == logging.WARNING
        configure_logging("debug")
        assert pkg_logger.level == logging.DEBUG
        assert len(pkg_logger.handlers) == max(1, len(previous_handlers))
    finally:
        pkg_logger.handlers = previous_handlers
        pkg_logger.setLevel(logging.NOTSET)
