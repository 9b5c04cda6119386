"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the telemetry backend, the line emitter and
the environment lookup must satisfy, so the log context can orchestrate
behaviour without depending on a vendor SDK or on ``sys.stdout``.

Contents
--------
* :class:`TransactionHandle` – backend trace span for one unit of work.
* :class:`SegmentHandle` – backend child span.
* :class:`Backend` – metric recording plus span creation.
* :class:`Emitter` – writes one rendered tag set per emitted call.
* :class:`EnvLoader` – reads the level threshold from the environment.

System Role
-----------
These protocols keep the dependency rule intact: adapters implement them and
the composition root injects them. Disabled telemetry is just another
implementation (:class:`~lib_context_log.adapters.backends.null.NullBackend`),
so call sites never branch on "is tracing enabled".
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class TransactionHandle(Protocol):
    """Backend-owned trace span representing one logical unit of work."""

    def notice_error(self, name: str) -> None:
        """Flag the span as failed with an error called *name*."""

    def end(self) -> None:
        """Close the span. The facade calls this at most once per handle."""


@runtime_checkable
class SegmentHandle(Protocol):
    """Backend-owned child span."""

    def end(self) -> None:
        """Close the span. The facade calls this at most once per handle."""


@runtime_checkable
class Backend(Protocol):
    """Telemetry capabilities the dispatcher and tracing helpers rely on.

    Why
    ----
    Keep vendor coupling behind a narrow surface that can be swapped for a
    no-op in disabled mode or a recorder in tests.

    Methods
    -------
    :meth:`record_full_metric` / :meth:`record_simple_metric` /
    :meth:`record_compound_metric`
        Record a value under a fully-qualified name with ``"key:value"`` tags.
    :meth:`start_transaction`
        Open a span; ``None`` means the backend does not trace.
    :meth:`start_segment`
        Open a child span under a live transaction handle.
    """

    def record_full_metric(self, name: str, value: float, *tags: str) -> None:
        """Record a full-resolution value."""

    def record_simple_metric(self, name: str, value: float, *tags: str) -> None:
        """Record a simple (counter-like) value."""

    def record_compound_metric(self, name: str, value: float, *tags: str) -> None:
        """Record a compound (aggregate) value."""

    def start_transaction(self, name: str) -> TransactionHandle | None:
        """Open a trace span named *name*."""

    def start_segment(self, transaction: TransactionHandle, name: str) -> SegmentHandle | None:
        """Open a child span named *name* under *transaction*."""


@runtime_checkable
class Emitter(Protocol):
    """Serialise a fully merged tag set into one output line."""

    def emit(self, tags: Mapping[str, Any]) -> None:
        """Write *tags* as a single line."""


@runtime_checkable
class EnvLoader(Protocol):
    """Resolve the level threshold from process configuration."""

    def load(self) -> int | None:
        """Return the configured threshold, ``None`` when nothing is set."""
