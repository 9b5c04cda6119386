"""Transaction and segment lifecycle: idempotent end, degenerate handles."""

from __future__ import annotations

import threading

import pytest

from lib_context_log.adapters.backends.null import NullBackend
from lib_context_log.adapters.backends.recording import RecordingBackend
from lib_context_log.application.tracing import Segment, Transaction, null_segment, start_transaction
from lib_context_log.observability import ACTIVE_TRANSACTION


def test_transaction_end_is_idempotent() -> None:
    backend = RecordingBackend()
    trx = start_transaction(backend, "checkout")
    trx.end()
    trx.end()
    assert backend.methods() == ["start_transaction", "end_transaction"]
    assert trx.ended and not trx.live


def test_transaction_without_handle_is_degenerate() -> None:
    trx = start_transaction(NullBackend(), "checkout")
    assert not trx.live
    segment = trx.segment("db")
    assert isinstance(segment, Segment)
    segment.end()
    trx.notice_error("ignored")
    trx.end()
    assert not trx.ended


def test_segment_end_is_idempotent() -> None:
    backend = RecordingBackend()
    trx = start_transaction(backend, "checkout")
    segment = trx.segment("db")
    segment.end()
    segment.end()
    assert backend.methods() == ["start_transaction", "start_segment", "end_segment"]


def test_null_segment_end_is_noop() -> None:
    segment = null_segment()
    segment.end()
    segment.end()
    assert not segment.live


def test_segment_after_transaction_end_is_degenerate() -> None:
    backend = RecordingBackend()
    trx = start_transaction(backend, "checkout")
    trx.end()
    trx.segment("late").end()
    assert "start_segment" not in backend.methods()


def test_notice_error_after_end_is_dropped() -> None:
    backend = RecordingBackend()
    trx = start_transaction(backend, "checkout")
    trx.end()
    trx.notice_error("late")
    assert "notice_error" not in backend.methods()


def test_context_managers_end_spans_and_bind_name() -> None:
    backend = RecordingBackend()
    with start_transaction(backend, "checkout") as trx:
        assert ACTIVE_TRANSACTION.get() == "checkout"
        with trx.segment("db"):
            pass
    assert ACTIVE_TRANSACTION.get() is None
    assert backend.methods() == [
        "start_transaction",
        "start_segment",
        "end_segment",
        "end_transaction",
    ]


def test_exception_inside_transaction_block_is_noticed() -> None:
    backend = RecordingBackend()
    with pytest.raises(ValueError):
        with start_transaction(backend, "checkout"):
            raise ValueError("bad input")
    assert backend.methods()[-2:] == ["notice_error", "end_transaction"]
    assert backend.calls[-2].name == "ValueError"


def test_concurrent_end_calls_reach_backend_once() -> None:
    backend = RecordingBackend()
    trx = Transaction(backend.start_transaction("checkout"), backend, "checkout")
    threads = [threading.Thread(target=trx.end) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert backend.methods().count("end_transaction") == 1
