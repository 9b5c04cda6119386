"""Unit tests for the library's self-diagnostics in ``observability``.

Validates the null handler, transaction binding, and event construction the
dispatcher and tracing helpers rely on.
"""

from __future__ import annotations

import logging

import pytest

from lib_context_log import get_logger
from lib_context_log.observability import (
    ACTIVE_TRANSACTION,
    bind_transaction,
    log_debug,
    make_event,
    reset_transaction,
)


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_transaction_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound transaction and contextual fields."""

    caplog.set_level(logging.DEBUG, logger="lib_context_log")
    token = bind_transaction("checkout")
    try:
        log_debug("metric_pushed", name="svc.hits")
    finally:
        reset_transaction(token)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"transaction": "checkout", "name": "svc.hits"}


def test_disabled_level_skips_record(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="lib_context_log")
    log_debug("ignored")
    assert not [r for r in caplog.records if r.getMessage() == "ignored"]


def test_reset_restores_previous_binding() -> None:
    outer = bind_transaction("outer")
    inner = bind_transaction("inner")
    reset_transaction(inner)
    assert ACTIVE_TRANSACTION.get() == "outer"
    reset_transaction(outer)
    assert ACTIVE_TRANSACTION.get() is None


def test_make_event_merges_optional_payload() -> None:
    assert make_event("push_metric", "svc.hits", {"type": "S"}) == {
        "operation": "push_metric",
        "name": "svc.hits",
        "type": "S",
    }
    assert make_event("set_level", None) == {"operation": "set_level", "name": None}
