"""Immutable logger configuration.

Purpose
-------
Replace process-wide mutable knobs (threshold, metric prefix, default metric
tags, forwarding switch) with one frozen value handed to the
:class:`~lib_context_log.context.Logger`. Changing configuration means
building a new value, so concurrent readers always see a consistent
snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .levels import NONE
from .tags import MetricTags


@dataclass(frozen=True, slots=True)
class LoggerSettings:
    """Snapshot of everything the log verbs and the dispatcher read.

    Attributes
    ----------
    level:
        Minimum severity that gets emitted. Defaults to ``NONE`` (silent).
    push_metrics:
        Whether metric records carried by log calls reach the backend.
    prefix:
        Namespace prepended to every forwarded metric name.
    default_tags:
        Metric tags applied to every forwarded record before its own tags.

    Examples
    --------
    >>> settings = LoggerSettings().with_forwarding("svc", {"cluster": "prod"})
    >>> settings.push_metrics, settings.prefix, dict(settings.default_tags)
    (True, 'svc', {'cluster': 'prod'})
    """

    level: int = NONE
    push_metrics: bool = False
    prefix: str = ""
    default_tags: MetricTags = field(default_factory=MetricTags)

    def __post_init__(self) -> None:
        if not isinstance(self.default_tags, MetricTags):
            object.__setattr__(self, "default_tags", MetricTags(self.default_tags))

    def with_level(self, level: int) -> LoggerSettings:
        """Return a copy with a new threshold."""

        return replace(self, level=level)

    def with_forwarding(self, prefix: str, default_tags: Mapping[str, Any] | None = None) -> LoggerSettings:
        """Return a copy with metric forwarding enabled under *prefix*."""

        return replace(
            self,
            push_metrics=True,
            prefix=prefix,
            default_tags=MetricTags(default_tags or {}),
        )
