"""
Tests for structured logging and payload sanitization.
"""

import logging

from semsearch.util.logging import StructuredLogger, sanitize_payload


def test_log_operation_format(caplog):
    structured = StructuredLogger("semsearch.test")

    with caplog.at_level(logging.INFO, logger="semsearch.test"):
        structured.log_operation("document.index", "success", {"doc_id": "d1"})

    assert "Operation: document.index, Status: success, Details: {'doc_id': 'd1'}" in caplog.text


def test_failed_operation_logs_error(caplog):
    structured = StructuredLogger("semsearch.test")

    with caplog.at_level(logging.INFO, logger="semsearch.test"):
        structured.log_vector_operation("delete", ["a", "b"], {"error": "down"}, status="failed")

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert "'count': 2" in record.getMessage()


def test_auth_denial_never_logs_credential(caplog):
    structured = StructuredLogger("semsearch.test")

    with caplog.at_level(logging.DEBUG, logger="semsearch.test"):
        structured.log_auth_event(False, "invalid_token", "/v1/search")

    assert "invalid_token" in caplog.text
    assert caplog.records[-1].levelno == logging.WARNING


def test_document_operation_redacts_text(caplog):
    structured = StructuredLogger("semsearch.test")

    with caplog.at_level(logging.INFO, logger="semsearch.test"):
        structured.log_document_operation("index", "d1", {"text": "private body"})

    assert "private body" not in caplog.text
    assert "[REDACTED]" in caplog.text


def test_sanitize_payload():
    payload = {
        "query": "secret search",
        "nested": {"token": "abc", "keep": "yes"},
        "items": ["x" * 150],
    }

    sanitized = sanitize_payload(payload)

    assert sanitized["query"] == "[REDACTED]"
    assert sanitized["nested"] == {"token": "[REDACTED]", "keep": "yes"}
    assert sanitized["items"][0] == "x" * 100 + "..."
    assert sanitize_payload(payload, reveal_sensitive=True)["query"] == "secret search"
