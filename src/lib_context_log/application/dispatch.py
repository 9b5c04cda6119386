"""Metric dispatch policy.

Purpose
-------
Route one :class:`~lib_context_log.domain.metrics.Metric` to the matching
backend recording call. The record's type alone decides the path:

=========  ==========================  ======================================
type       backend call                extra side effect
=========  ==========================  ======================================
FULL       ``record_full_metric``      –
SIMPLE     ``record_simple_metric``    –
COMPOUND   ``record_compound_metric``  –
ERROR      ``record_simple_metric``    ``notice_error`` on the active
           (value 1)                   transaction, before recording
=========  ==========================  ======================================

Contents
    - ``qualify_name``: prefix a metric name with the configured namespace.
    - ``push_metric``: public entry point.

System Role
-----------
Free of I/O itself; called by the log context once per forwarded record with
the context's transaction and accumulated metric tags.
"""

from __future__ import annotations

from typing import Any, Callable, Final, Mapping, Optional

from ..domain.errors import BackendError, DispatchError
from ..domain.metrics import Metric, MetricType
from ..domain.settings import LoggerSettings
from ..domain.tags import as_metric_tags, merge_tags
from ..observability import log_debug, make_event
from .ports import Backend
from .tracing import Transaction

_Route = Callable[[Backend, str, float, list[str], Optional[Transaction]], None]


def _record_full(backend: Backend, name: str, value: float, tags: list[str], _trx: Transaction | None) -> None:
    backend.record_full_metric(name, value, *tags)


def _record_simple(backend: Backend, name: str, value: float, tags: list[str], _trx: Transaction | None) -> None:
    backend.record_simple_metric(name, value, *tags)


def _record_compound(backend: Backend, name: str, value: float, tags: list[str], _trx: Transaction | None) -> None:
    backend.record_compound_metric(name, value, *tags)


def _record_error(backend: Backend, name: str, _value: float, tags: list[str], trx: Transaction | None) -> None:
    if trx is not None:
        trx.notice_error(name)
    backend.record_simple_metric(name, 1.0, *tags)


_ROUTES: Final[Mapping[MetricType, _Route]] = {
    MetricType.FULL: _record_full,
    MetricType.SIMPLE: _record_simple,
    MetricType.COMPOUND: _record_compound,
    MetricType.ERROR: _record_error,
}


def qualify_name(prefix: str, name: str) -> str:
    """Return ``prefix.name``; an empty prefix leaves *name* untouched.

    Examples
    --------
    >>> qualify_name("svc", "hits"), qualify_name("", "hits")
    ('svc.hits', 'hits')
    """

    return f"{prefix}.{name}" if prefix else name


def push_metric(
    metric: Metric,
    transaction: Transaction | None = None,
    *tags: Mapping[str, Any],
    backend: Backend,
    settings: LoggerSettings,
) -> None:
    """Record *metric* on *backend* under the configured prefix and default tags.

    Parameters
    ----------
    metric:
        Record to forward.
    transaction:
        Active transaction of the calling context; only ERROR records use it.
    tags:
        Extra metric tag maps, applied after the defaults and the record's
        own tags.
    backend / settings:
        Collaborator and configuration snapshot of the calling logger.

    Raises
    ------
    DispatchError
        When the record type has no route; the backend is not called.
    BackendError
        When the backend raises while recording.
    """

    try:
        route = _ROUTES[metric.metric_type]
    except (KeyError, TypeError) as exc:
        raise DispatchError(f"unknown metric type: {metric.metric_type!r}") from exc

    name = qualify_name(settings.prefix, metric.name)
    rendered = as_metric_tags(merge_tags(settings.default_tags, metric.tags, *tags))
    try:
        route(backend, name, metric.value, rendered, transaction)
    except Exception as exc:
        raise BackendError(f"backend failed to record {name}: {exc}") from exc
    log_debug("metric_pushed", **make_event("push_metric", name, {"type": MetricType(metric.metric_type).value}))
