"""Classification of variadic log-call arguments.

Purpose
-------
Turn the loosely typed positional arguments of a log verb into a closed set
of variants and fold them into the scopes a single call needs: the tags of
the emitted line, the metric tags sent to the backend, and the metric
records to forward.

Contents
    - ``EventLabel`` / ``TagSet`` / ``MetricBatch`` / ``MetricTagSet``: the
      four argument variants, unioned as ``Argument``.
    - ``classify``: maps a raw call-site value onto a variant or raises
      :class:`ContractViolation`.
    - ``CallScope`` / ``collect``: accumulates classified arguments left to
      right.

System Role
-----------
Invoked by :meth:`lib_context_log.context.LogContext.log` after the level gate
has let the call through.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union

from ..domain.errors import ContractViolation
from ..domain.metrics import EMPTY_METRICS, Metrics
from ..domain.tags import EMPTY_METRIC_TAGS, MetricTags, Tags

EVENT_KEY = "event"


@dataclass(frozen=True, slots=True)
class EventLabel:
    """Short label recorded on the line under the ``event`` key."""

    label: str


@dataclass(frozen=True, slots=True)
class TagSet:
    """Tags merged into the emitted line."""

    tags: Tags


@dataclass(frozen=True, slots=True)
class MetricBatch:
    """Metric records rendered on the line and kept for forwarding."""

    metrics: Metrics


@dataclass(frozen=True, slots=True)
class MetricTagSet:
    """Tags that only reach the telemetry backend."""

    tags: MetricTags


Argument = Union[EventLabel, TagSet, MetricBatch, MetricTagSet]


def classify(value: Any) -> Argument:
    """Return the variant describing *value*.

    ``MetricTags`` is checked before generic mappings because it is itself a
    mapping.

    Raises
    ------
    ContractViolation
        When *value* is none of ``str``, a mapping, ``MetricTags``, ``Metrics``
        or an already classified variant.

    Examples
    --------
    >>> classify("login")
    EventLabel(label='login')
    >>> classify(42)
    Traceback (most recent call last):
    ...
    lib_context_log.domain.errors.ContractViolation: Argument must be an event label, Tags, MetricTags or Metrics: 42
    """

    if isinstance(value, (EventLabel, TagSet, MetricBatch, MetricTagSet)):
        return value
    if isinstance(value, str):
        return EventLabel(value)
    if isinstance(value, Metrics):
        return MetricBatch(value)
    if isinstance(value, MetricTags):
        return MetricTagSet(value)
    if isinstance(value, Mapping):
        return TagSet(value if isinstance(value, Tags) else Tags(value))
    raise ContractViolation(f"Argument must be an event label, Tags, MetricTags or Metrics: {value!r}")


@dataclass(frozen=True, slots=True)
class CallScope:
    """Everything one log call carries after classification."""

    tags: Tags = field(default_factory=Tags)
    metric_tags: MetricTags = field(default_factory=MetricTags)
    metrics: Metrics = field(default=EMPTY_METRICS)

    def apply(self, argument: Argument) -> CallScope:
        """Return a new scope with *argument* folded in."""

        if isinstance(argument, EventLabel):
            return CallScope(self.tags.merge({EVENT_KEY: argument.label}), self.metric_tags, self.metrics)
        if isinstance(argument, TagSet):
            return CallScope(self.tags.merge(argument.tags), self.metric_tags, self.metrics)
        if isinstance(argument, MetricBatch):
            values = {metric.name: metric.value for metric in argument.metrics}
            return CallScope(self.tags.merge(values), self.metric_tags, self.metrics + argument.metrics)
        return CallScope(self.tags, self.metric_tags.merge(argument.tags), self.metrics)


def collect(arguments: Iterable[Any], metric_tags: MetricTags = EMPTY_METRIC_TAGS) -> CallScope:
    """Classify *arguments* left to right on top of inherited *metric_tags*.

    Several metric batches in one call are concatenated in argument order.

    Examples
    --------
    >>> from lib_context_log.domain.metrics import counter
    >>> scope = collect(["login", {"user": "ada"}, counter("hits")])
    >>> dict(scope.tags), len(scope.metrics)
    ({'event': 'login', 'user': 'ada', 'hits': 1.0}, 1)
    """

    scope = CallScope(metric_tags=metric_tags)
    for value in arguments:
        scope = scope.apply(classify(value))
    return scope
