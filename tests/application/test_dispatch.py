"""Metric routing by record type."""

from __future__ import annotations

import pytest

from lib_context_log.adapters.backends.recording import RecordingBackend
from lib_context_log.application.dispatch import push_metric, qualify_name
from lib_context_log.application.tracing import start_transaction
from lib_context_log.domain.errors import BackendError, DispatchError
from lib_context_log.domain.metrics import Metric, MetricType, compound, counter, error, full
from lib_context_log.domain.settings import LoggerSettings

SETTINGS = LoggerSettings().with_forwarding("svc", {"cluster": "prod"})


class ExplodingBackend(RecordingBackend):
    def record_full_metric(self, name: str, value: float, *tags: str) -> None:
        raise RuntimeError("collector down")


def test_simple_metric_gets_prefixed_name() -> None:
    backend = RecordingBackend()
    push_metric(counter("hits")[0], backend=backend, settings=SETTINGS)
    (call,) = backend.calls
    assert call.method == "record_simple_metric"
    assert call.name == "svc.hits"
    assert call.value == 1.0


@pytest.mark.parametrize(
    ("batch", "method"),
    [
        (full("latency", 12.5), "record_full_metric"),
        (counter("hits"), "record_simple_metric"),
        (compound("size", 3), "record_compound_metric"),
        (error("boom"), "record_simple_metric"),
    ],
)
def test_type_selects_backend_call(batch, method) -> None:
    backend = RecordingBackend()
    push_metric(batch[0], backend=backend, settings=SETTINGS)
    assert backend.methods() == [method]


def test_tags_merge_defaults_record_and_extras() -> None:
    backend = RecordingBackend()
    record = full("latency", 1, {"route": "/a", "cluster": "override"})[0]
    push_metric(record, None, {"route": "/b", "user": "ada"}, backend=backend, settings=SETTINGS)
    assert sorted(backend.calls[0].tags) == ["cluster:override", "route:/b", "user:ada"]


def test_empty_prefix_keeps_bare_name() -> None:
    backend = RecordingBackend()
    push_metric(counter("hits")[0], backend=backend, settings=LoggerSettings())
    assert backend.calls[0].name == "hits"
    assert qualify_name("svc", "hits") == "svc.hits"


def test_error_metric_notices_transaction_before_recording() -> None:
    backend = RecordingBackend()
    trx = start_transaction(backend, "checkout")
    push_metric(error("payment_failed", {"value": "ignored"})[0], trx, backend=backend, settings=SETTINGS)
    assert backend.methods() == ["start_transaction", "notice_error", "record_simple_metric"]
    notice = backend.calls[1]
    assert notice.name == "svc.payment_failed"
    assert backend.calls[2].value == 1.0


def test_error_metric_without_transaction_only_records() -> None:
    backend = RecordingBackend()
    push_metric(error("boom")[0], None, backend=backend, settings=SETTINGS)
    assert backend.methods() == ["record_simple_metric"]


def test_unknown_type_raises_without_backend_call() -> None:
    backend = RecordingBackend()
    with pytest.raises(DispatchError, match="unknown metric type"):
        push_metric(Metric("X", "odd", 1), backend=backend, settings=SETTINGS)  # type: ignore[arg-type]
    assert backend.calls == []


def test_raw_type_code_dispatches_like_the_enum() -> None:
    backend = RecordingBackend()
    push_metric(Metric("C", "size", 2), backend=backend, settings=SETTINGS)  # type: ignore[arg-type]
    assert backend.methods() == ["record_compound_metric"]
    assert MetricType("C") is MetricType.COMPOUND


def test_backend_failure_is_wrapped() -> None:
    with pytest.raises(BackendError, match="collector down") as info:
        push_metric(full("latency", 1)[0], backend=ExplodingBackend(), settings=SETTINGS)
    assert isinstance(info.value.__cause__, RuntimeError)
