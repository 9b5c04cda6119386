"""Log contexts and the logger runtime that backs them.

Purpose
-------
Provide the receiver of every logging verb. A :class:`LogContext` is an
immutable bundle of accumulated line tags, accumulated metric tags and an
optional active transaction; deriving a context never touches its parent. A
:class:`Logger` owns the collaborators (settings snapshot, backend, emitter)
that all contexts derived from it share.

Contents
--------
* :class:`Logger` – runtime holding a :class:`LoggerSettings` snapshot, a
  telemetry backend and an emitter; replaces them copy-on-write under a lock.
* :class:`LogContext` – verbs (``trace`` … ``fatalf``), derivation helpers
  (``with_context``, ``with_metrics_context``, ``transaction``) and segment
  helpers.

System Role
-----------
Verbs gate on the threshold first and return before any merging or
formatting when suppressed. Emitted calls go through the argument classifier,
the emitter and, when forwarding is enabled, the metric dispatcher.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from threading import Lock
from typing import Any, Mapping, NoReturn

from .adapters.backends.null import NullBackend
from .adapters.emitter.stream import StreamEmitter
from .adapters.env.default import DefaultEnvLoader
from .application.arguments import collect
from .application.dispatch import push_metric
from .application.ports import Backend, Emitter, EnvLoader
from .application.tracing import Segment, Transaction, null_segment, start_transaction
from .domain import levels
from .domain.errors import BackendError, DispatchError, LoggedError
from .domain.settings import LoggerSettings
from .domain.tags import MetricTags, Tags, merge_tags
from .observability import log_debug, log_error, make_event

CLUSTER_TAG = "cluster"


class Logger:
    """Composition unit shared by every context derived from :meth:`context`.

    Why
    ----
    Tests and embedding applications need isolated loggers; the process-wide
    facade in :mod:`lib_context_log.core` is just one instance.

    What
    ----
    Readers take an unlocked snapshot of :attr:`settings`; writers build a new
    :class:`LoggerSettings` and swap it under a lock, so a verb never sees a
    half-applied configuration.

    Examples
    --------
    >>> import io
    >>> stream = io.StringIO()
    >>> logger = Logger(LoggerSettings(level=levels.DEBUG), emitter=StreamEmitter(stream))
    >>> logger.context().debug("x")
    >>> sorted(stream.getvalue().strip()[1:-1].split("]["))
    ['level:debug', 'message:x']
    """

    def __init__(
        self,
        settings: LoggerSettings | None = None,
        *,
        backend: Backend | None = None,
        emitter: Emitter | None = None,
    ) -> None:
        self._settings = settings if settings is not None else LoggerSettings()
        self._backend: Backend = backend if backend is not None else NullBackend()
        self._emitter: Emitter = emitter if emitter is not None else StreamEmitter()
        self._lock = Lock()
        self._root = LogContext(self)

    @property
    def settings(self) -> LoggerSettings:
        return self._settings

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def emitter(self) -> Emitter:
        return self._emitter

    def context(self) -> LogContext:
        """Return the root context (no tags, no transaction)."""

        return self._root

    def configure(self, settings: LoggerSettings, *, backend: Backend | None = None) -> None:
        """Swap in a new settings snapshot (and optionally a new backend)."""

        with self._lock:
            if backend is not None:
                self._backend = backend
            self._settings = settings

    def set_level(self, level: int) -> None:
        """Set the threshold directly."""

        with self._lock:
            self._settings = self._settings.with_level(level)
        log_debug("level_changed", **make_event("set_level", None, {"level": level}))

    def set_level_by_name(self, name: str) -> None:
        """Set the threshold from a level name; unknown names raise ``ConfigurationError``."""

        self.set_level(levels.level_by_name(name))

    def set_level_from_env(self, loader: EnvLoader | None = None) -> bool:
        """Apply ``LOG_LEVEL`` when present and report whether it was set."""

        level = (loader or DefaultEnvLoader()).load()
        if level is None:
            return False
        self.set_level(level)
        return True

    def push_metrics(
        self,
        prefix: str,
        environment: str,
        *,
        backend: Backend | None = None,
        default_tags: Mapping[str, Any] | None = None,
    ) -> None:
        """Enable metric forwarding under *prefix* tagging every record with ``cluster``."""

        tags = merge_tags({CLUSTER_TAG: environment}, default_tags or {})
        with self._lock:
            if backend is not None:
                self._backend = backend
            self._settings = self._settings.with_forwarding(prefix, tags)
        log_debug("forwarding_enabled", **make_event("push_metrics", prefix, {"cluster": environment}))


@dataclass(frozen=True, slots=True)
class LogContext:
    """Immutable receiver of the logging verbs.

    Attributes
    ----------
    logger:
        Runtime providing settings, backend and emitter.
    tags:
        Line tags rendered on every emitted call.
    metric_tags:
        Tags applied to every forwarded metric record.
    active_transaction:
        Transaction shared with derived contexts, or ``None``.
    """

    logger: Logger = field(repr=False)
    tags: Tags = field(default_factory=Tags)
    metric_tags: MetricTags = field(default_factory=MetricTags)
    active_transaction: Transaction | None = None

    # derivation

    def with_context(self, tags: Mapping[str, Any] | None = None, **fields: Any) -> LogContext:
        """Return a child context whose line tags include *tags* and *fields*."""

        return replace(self, tags=self.tags.merge(tags or {}, fields))

    def with_metrics_context(self, metric_tags: Mapping[str, Any] | None = None, **fields: Any) -> LogContext:
        """Return a child context whose forwarded metrics carry *metric_tags*."""

        return replace(self, metric_tags=self.metric_tags.merge(metric_tags or {}, fields))

    def transaction(self, name: str) -> LogContext:
        """Return a child context owning a new transaction called *name*.

        When forwarding is disabled the context is returned unchanged. The
        caller owns the new transaction and must end it (``end_transaction``
        or ``with ctx.active_transaction:``).
        """

        if not self.logger.settings.push_metrics:
            return self
        return replace(self, active_transaction=start_transaction(self.logger.backend, name))

    def start_segment(self, name: str) -> Segment:
        """Start a segment of the active transaction, or a null segment without one."""

        self.metric(f'Segment "{name}" started')
        if self.active_transaction is not None:
            return self.active_transaction.segment(name)
        return null_segment()

    def end_transaction(self) -> None:
        """End the active transaction, if any. Safe to call repeatedly."""

        if self.active_transaction is not None:
            self.active_transaction.end()

    # verbs

    def trace(self, value: Any, *args: Any) -> None:
        if self.logger.settings.level > levels.TRACE:
            return
        self.log("trace", value, *args)

    def debug(self, value: Any, *args: Any) -> None:
        if self.logger.settings.level > levels.DEBUG:
            return
        self.log("debug", value, *args)

    def info(self, value: Any, *args: Any) -> None:
        if self.logger.settings.level > levels.INFO:
            return
        self.log("info", value, *args)

    def metric(self, value: Any, *args: Any) -> None:
        if self.logger.settings.level > levels.METRIC:
            return
        self.log("metric", value, *args)

    def warn(self, value: Any, *args: Any) -> None:
        if self.logger.settings.level > levels.WARN:
            return
        self.log("warn", value, *args)

    def error(self, value: Any, *args: Any) -> LoggedError:
        """Log at ERROR and return an error carrying the message, even when suppressed."""

        err = LoggedError(str(value))
        if self.logger.settings.level <= levels.ERROR:
            self.log("error", str(err), *args)
        return err

    def critic(self, value: Any, *args: Any) -> LoggedError:
        """Log at CRITIC and return an error carrying the message, even when suppressed."""

        err = LoggedError(str(value))
        if self.logger.settings.level <= levels.CRITIC:
            self.log("critic", str(err), *args)
        return err

    def errorf(self, fmt: str, *fmt_args: Any) -> LoggedError:
        """``%``-format *fmt*, log it at ERROR and return it as an error."""

        err = LoggedError(_format(fmt, fmt_args))
        if self.logger.settings.level <= levels.ERROR:
            self.log("error", str(err))
        return err

    def fatalf(self, fmt: str, *fmt_args: Any) -> NoReturn:
        """Log at FATAL regardless of the threshold, then exit with status 1."""

        self.log("fatal", _format(fmt, fmt_args))
        sys.exit(1)

    def log(self, level: str, message: Any, *args: Any) -> None:
        """Emit one line labelled *level* and forward any carried metrics.

        Not gated: the verbs above decide whether this is reached.
        """

        scope = collect(args, self.metric_tags)
        self.logger.emitter.emit(merge_tags(self.tags, {"level": level, "message": str(message)}, scope.tags))

        settings = self.logger.settings
        if not settings.push_metrics:
            return
        for record in scope.metrics:
            try:
                push_metric(
                    record,
                    self.active_transaction,
                    scope.metric_tags,
                    backend=self.logger.backend,
                    settings=settings,
                )
            except (DispatchError, BackendError) as exc:
                log_error("metric_push_failed", **make_event("push_metric", record.name, {"error": str(exc)}))
                self.errorf("Error pushing metric: %s", exc)


def _format(fmt: str, fmt_args: tuple[Any, ...]) -> str:
    """Apply ``%``-style formatting only when arguments were supplied."""

    return fmt % fmt_args if fmt_args else fmt
