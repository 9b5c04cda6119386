"""Typed metric records and the persistent metric list.

Purpose
-------
Describe the telemetry points a log call can carry. A :class:`Metric` is an
immutable typed value; :class:`Metrics` is an ordered batch built by chained
"add" calls. The batch is backed by a tuple, so two lists derived from the
same base never share a mutable tail.

Contents
--------
* :class:`MetricType` – the closed set of record types (full, simple,
  compound, error).
* :class:`Metric` – a single typed, named, valued record.
* :class:`Metrics` – immutable batch exposing fluent ``full``/``simple``/
  ``compound``/``counter``/``error`` builders.
* :func:`full` / :func:`simple` / :func:`compound` / :func:`counter` /
  :func:`error` – one-record batch constructors.

System Role
-----------
Domain layer. The argument classifier turns batches into line tags and the
dispatcher routes each record to the backend by its type.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, overload

from .tags import EMPTY_METRIC_TAGS, MetricTags


class MetricType(str, Enum):
    """Record type; decides which backend call the dispatcher makes."""

    FULL = "F"
    SIMPLE = "S"
    COMPOUND = "C"
    ERROR = "E"


@dataclass(frozen=True, slots=True)
class Metric:
    """A single telemetry point.

    Examples
    --------
    >>> Metric(MetricType.SIMPLE, "hits", 1).value
    1.0
    """

    metric_type: MetricType
    name: str
    value: float
    tags: MetricTags = field(default_factory=MetricTags)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))
        if not isinstance(self.tags, MetricTags):
            object.__setattr__(self, "tags", MetricTags(self.tags))


def _record_tags(tags: tuple[Mapping[str, Any], ...]) -> MetricTags:
    """Merge constructor tag arguments left to right into one :class:`MetricTags`."""

    if not tags:
        return EMPTY_METRIC_TAGS
    return EMPTY_METRIC_TAGS.merge(*tags)


@dataclass(frozen=True, slots=True)
class Metrics(Sequence[Metric]):
    """Ordered, immutable batch of :class:`Metric` records.

    Why
    ----
    Call sites build batches incrementally (``counter("a").full("b", 3)``) and
    may branch from a shared base. Every builder returns a new batch so
    siblings cannot alias each other.

    Examples
    --------
    >>> base = counter("hits")
    >>> left = base.full("latency", 12.5)
    >>> right = base.compound("size", 3)
    >>> [m.name for m in left], [m.name for m in right]
    (['hits', 'latency'], ['hits', 'size'])
    """

    values: tuple[Metric, ...] = ()

    @overload
    def __getitem__(self, index: int) -> Metric: ...

    @overload
    def __getitem__(self, index: slice) -> Metrics: ...

    def __getitem__(self, index: int | slice) -> Metric | Metrics:
        if isinstance(index, slice):
            return Metrics(self.values[index])
        return self.values[index]

    def __iter__(self) -> Iterator[Metric]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __add__(self, other: Metrics) -> Metrics:
        if not isinstance(other, Metrics):
            return NotImplemented
        return Metrics(self.values + other.values)

    def add(self, metric: Metric) -> Metrics:
        """Return a new batch with *metric* appended."""

        return Metrics(self.values + (metric,))

    def full(self, name: str, value: float, *tags: Mapping[str, Any]) -> Metrics:
        """Append a full-resolution record."""

        return self.add(Metric(MetricType.FULL, name, value, _record_tags(tags)))

    def simple(self, name: str, value: float, *tags: Mapping[str, Any]) -> Metrics:
        """Append a simple (counter-like) record."""

        return self.add(Metric(MetricType.SIMPLE, name, value, _record_tags(tags)))

    def compound(self, name: str, value: float, *tags: Mapping[str, Any]) -> Metrics:
        """Append a compound (aggregate) record."""

        return self.add(Metric(MetricType.COMPOUND, name, value, _record_tags(tags)))

    def counter(self, name: str, *tags: Mapping[str, Any]) -> Metrics:
        """Append a simple record with value 1."""

        return self.simple(name, 1.0, *tags)

    def error(self, name: str, *tags: Mapping[str, Any]) -> Metrics:
        """Append an error record with value 1; it also notifies the active transaction."""

        return self.add(Metric(MetricType.ERROR, name, 1.0, _record_tags(tags)))


EMPTY_METRICS = Metrics()


def full(name: str, value: float, *tags: Mapping[str, Any]) -> Metrics:
    """Return a batch holding one full-resolution record."""

    return EMPTY_METRICS.full(name, value, *tags)


def simple(name: str, value: float, *tags: Mapping[str, Any]) -> Metrics:
    """Return a batch holding one simple record."""

    return EMPTY_METRICS.simple(name, value, *tags)


def compound(name: str, value: float, *tags: Mapping[str, Any]) -> Metrics:
    """Return a batch holding one compound record."""

    return EMPTY_METRICS.compound(name, value, *tags)


def counter(name: str, *tags: Mapping[str, Any]) -> Metrics:
    """Return a batch holding one simple record with value 1.

    Examples
    --------
    >>> batch = counter("hits")
    >>> batch[0]
    Metric(metric_type=<MetricType.SIMPLE: 'S'>, name='hits', value=1.0, tags=MetricTags({}))
    """

    return EMPTY_METRICS.counter(name, *tags)


def error(name: str, *tags: Mapping[str, Any]) -> Metrics:
    """Return a batch holding one error record."""

    return EMPTY_METRICS.error(name, *tags)
