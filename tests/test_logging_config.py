"""Tests for structured logging."""

import io
import json
import logging
import sys
from datetime import date
from decimal import Decimal

from cashplan.logging_config import StructuredFormatter, configure_logging, get_logger


def test_get_logger_namespace():
    assert get_logger("domain.ledger").name == "cashplan.domain.ledger"


def test_formatter_emits_json_with_extras():
    record = logging.LogRecord("cashplan.test", logging.WARNING, __file__, 1, "line skipped", (), None)
    record.line_number = 3
    record.amount = Decimal("12.50")
    record.day = date(2023, 10, 1)

    payload = json.loads(StructuredFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "cashplan.test"
    assert payload["message"] == "line skipped"
    assert payload["line_number"] == 3
    assert payload["amount"] == "12.50"
    assert payload["day"] == "2023-10-01"


def test_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            "cashplan.test", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
        )

    payload = json.loads(StructuredFormatter().format(record))

    assert payload["exc_type"] == "RuntimeError"
    assert payload["exc_message"] == "boom"
    assert "Traceback" in payload["traceback"]


def test_configure_logging_is_idempotent():
    stream = io.StringIO()
    configure_logging(level="INFO", stream=stream)
    configure_logging(level="DEBUG", stream=io.StringIO())

    get_logger("test").info("hello", extra={"count": 2})
    get_logger("test").debug("hidden")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["count"] == 2


def test_audit_entries_are_logged(session):
    stream = io.StringIO()
    configure_logging(level="INFO", stream=stream)

    entry = session.audit.append("Deleted transaction: X - 1 USD")

    payload = json.loads(stream.getvalue().splitlines()[-1])
    assert payload["logger"] == "cashplan.audit"
    assert payload["message"] == "Deleted transaction: X - 1 USD"
    assert payload["audit_id"] == entry.id
