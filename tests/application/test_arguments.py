"""Classification of variadic log-call arguments."""

from __future__ import annotations

import pytest

from lib_context_log.application.arguments import (
    CallScope,
    EventLabel,
    MetricBatch,
    MetricTagSet,
    TagSet,
    classify,
    collect,
)
from lib_context_log.domain.errors import ContractViolation
from lib_context_log.domain.metrics import counter, full
from lib_context_log.domain.tags import MetricTags, Tags


def test_classify_variants() -> None:
    assert classify("login") == EventLabel("login")
    assert isinstance(classify(Tags({"a": 1})), TagSet)
    assert isinstance(classify({"a": 1}), TagSet)
    assert isinstance(classify(MetricTags({"a": 1})), MetricTagSet)
    assert isinstance(classify(counter("hits")), MetricBatch)


def test_classify_passes_variants_through() -> None:
    label = EventLabel("x")
    assert classify(label) is label


@pytest.mark.parametrize("value", [42, 1.5, None, ["a"], object()])
def test_unsupported_argument_is_contract_violation(value) -> None:
    with pytest.raises(ContractViolation):
        classify(value)


def test_event_label_lands_under_event_key() -> None:
    scope = collect(["login"])
    assert scope.tags == {"event": "login"}


def test_later_arguments_win() -> None:
    scope = collect(["first", {"a": 1}, "second", {"a": 2}])
    assert scope.tags == {"event": "second", "a": 2}


def test_metric_batch_adds_line_tags_and_keeps_records() -> None:
    scope = collect([counter("hits").full("latency", 12.5)])
    assert scope.tags == {"hits": 1.0, "latency": 12.5}
    assert [m.name for m in scope.metrics] == ["hits", "latency"]


def test_multiple_metric_batches_are_concatenated() -> None:
    scope = collect([counter("a"), full("b", 2)])
    assert [m.name for m in scope.metrics] == ["a", "b"]


def test_metric_tags_stay_off_the_line() -> None:
    scope = collect([MetricTags({"route": "/x"})], MetricTags({"team": "core", "route": "/"}))
    assert scope.tags == {}
    assert scope.metric_tags == {"team": "core", "route": "/x"}
    assert isinstance(scope.metric_tags, MetricTags)


def test_empty_call_scope() -> None:
    scope = CallScope()
    assert scope.tags == {} and scope.metric_tags == {} and len(scope.metrics) == 0
