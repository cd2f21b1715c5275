"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging

from polychat.base.log_support import JsonFormatter
from polychat.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
)


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("POLYCHAT_LOG_LEVEL", "ERROR")
    logger = get_logger(name="polychat.test", json_mode=True, level=logging.DEBUG)
    # INFO log shouldn't appear
    logger.info("hello")
    out = capsys.readouterr().err
    assert out == ""  # nosec B101 - asserts are appropriate in unit tests
    # ERROR should be emitted as JSON
    logger.error("fail")
    out = capsys.readouterr().err
    data = json.loads(out.strip())
    assert data["level"] == "ERROR"  # nosec B101 - asserts are appropriate in unit tests
    monkeypatch.delenv("POLYCHAT_LOG_LEVEL")
    get_logger(name="polychat.test")


def test_log_event_merges_context_and_drops_none(capsys):
    logger = get_logger(name="polychat.test2", json_mode=True)
    ctx = LogContext(provider="openai", model="gpt-4o", extra={"request": "r1"})
    log_event(logger, "chat.end", ctx, attempts=2, status=None, tokens={"in": 1, "out": 2})
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "chat.end"  # nosec B101 - asserts are fine in tests
    assert data["provider"] == "openai"  # nosec B101 - asserts are fine in tests
    assert data["request"] == "r1"  # nosec B101 - asserts are fine in tests
    assert data["attempts"] == 2  # nosec B101 - asserts are fine in tests
    assert "status" not in data  # nosec B101 - None fields are dropped
    assert data["tokens"] == {"in": 1, "out": 2}  # nosec B101 - asserts are fine in tests


def test_json_formatter_hoists_json_message() -> None:
    """Ensure the formatter hoists JSON message keys without double escaping."""

    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="polychat.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"provider": "anthropic", "event": "chat.start"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["provider"] == "anthropic"  # nosec B101 - validates hoisting
    assert payload["event"] == "chat.start"  # nosec B101 - validates hoisting
    assert payload["logger"] == "polychat.test.json"  # nosec B101 - standard field


def test_child_logger_respects_warning_level() -> None:
    """Validate that INFO logs are suppressed when the base level is WARNING."""

    logger = get_logger(name="polychat.test.levels", json_mode=False)
    base_logger = logging.getLogger("polychat")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    saved = base_logger.handlers[:]
    base_logger.handlers[:] = [handler]
    try:
        configure_logger(level=logging.WARNING)
        stream.truncate(0)
        stream.seek(0)

        logger.info("hidden")
        assert stream.getvalue() == ""  # nosec B101 - INFO suppressed

        logger.error("visible")
        lines = [ln for ln in stream.getvalue().splitlines() if ln]
        assert lines == ["visible"]  # nosec B101 - ERROR allowed
    finally:
        base_logger.handlers[:] = saved
        configure_logger(level=logging.INFO)


def test_configure_logger_attaches_file_handler(tmp_path) -> None:
    log_file = tmp_path / "logs" / "polychat.log"
    logger = configure_logger(file_path=str(log_file))
    try:
        log_event(get_logger("polychat.test.file"), "file.event", answer=42)
        for h in logger.handlers:
            h.flush()
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["answer"] == 42  # nosec B101 - asserts are fine in tests
    finally:
        configure_logger(file_path=None)


def test_console_handler_replaced_after_stream_closed(capsys) -> None:
    """A console handler bound to a closed stream is swapped for a live one."""

    base_logger = get_logger()
    dead = io.StringIO()
    for h in base_logger.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            h.setStream(dead)
    dead.close()

    logger = get_logger(name="polychat.test.reopen")
    log_event(logger, "stream.reopened", answer=7)
    data = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert data["event"] == "stream.reopened"  # nosec B101 - asserts are fine in tests
    assert all(  # nosec B101 - no handler left on the dead stream
        getattr(h, "stream", None) is not dead for h in logging.getLogger("polychat").handlers
    )
