"""Composition root and process-wide default facade for ``lib_context_log``.

Purpose
-------
Wire the default adapters (stdout emitter, null backend, ``LOG_LEVEL``
lookup) into one :class:`~lib_context_log.context.Logger` and expose its root
context through module-level verbs, so simple call sites can write
``log.info("started", "boot")`` without carrying a context around.

Contents
--------
* :func:`default_logger` / :func:`default_context` – access the shared
  instances.
* :func:`set_level` / :func:`set_level_by_name` / :func:`set_level_from_env` –
  threshold management.
* :func:`push_metrics` – enable metric forwarding with a prefix and cluster
  tag.
* Module-level verbs delegating to the root context: :func:`trace`,
  :func:`debug`, :func:`info`, :func:`metric`, :func:`warn`, :func:`error`,
  :func:`critic`, :func:`errorf`, :func:`fatalf`.
* Derivation shortcuts: :func:`with_context`, :func:`with_metrics_context`,
  :func:`transaction`.

System Role
-----------
The threshold is read from ``LOG_LEVEL`` once at import; an invalid value
raises :class:`ConfigurationError` right away. Configuration calls are meant
for the startup phase; they are lock-protected, but mixing them with steady
state logging from other threads only guarantees that each call sees either
the old or the new settings.
"""

from __future__ import annotations

from typing import Any, Mapping, NoReturn

from .adapters.env.default import DefaultEnvLoader
from .application.ports import Backend, EnvLoader
from .context import LogContext, Logger
from .domain.errors import LoggedError
from .domain.settings import LoggerSettings


def _bootstrap() -> Logger:
    level = DefaultEnvLoader().load()
    settings = LoggerSettings() if level is None else LoggerSettings(level=level)
    return Logger(settings)


_DEFAULT_LOGGER = _bootstrap()


def default_logger() -> Logger:
    """Return the process-wide logger used by the module-level verbs."""

    return _DEFAULT_LOGGER


def default_context() -> LogContext:
    """Return the root context of :func:`default_logger`."""

    return _DEFAULT_LOGGER.context()


def set_level(level: int) -> None:
    _DEFAULT_LOGGER.set_level(level)


def set_level_by_name(name: str) -> None:
    _DEFAULT_LOGGER.set_level_by_name(name)


def set_level_from_env(loader: EnvLoader | None = None) -> bool:
    return _DEFAULT_LOGGER.set_level_from_env(loader)


def push_metrics(
    prefix: str,
    environment: str,
    *,
    backend: Backend | None = None,
    default_tags: Mapping[str, Any] | None = None,
) -> None:
    """Enable metric forwarding on the default logger.

    Parameters
    ----------
    prefix:
        Namespace prepended to every forwarded metric name (``prefix.name``).
    environment:
        Value of the ``cluster`` tag applied to every forwarded record.
    backend:
        Telemetry backend; the current one (a no-op by default) is kept when
        omitted.
    default_tags:
        Additional metric tags applied to every forwarded record.
    """

    _DEFAULT_LOGGER.push_metrics(prefix, environment, backend=backend, default_tags=default_tags)


def trace(value: Any, *args: Any) -> None:
    default_context().trace(value, *args)


def debug(value: Any, *args: Any) -> None:
    default_context().debug(value, *args)


def info(value: Any, *args: Any) -> None:
    default_context().info(value, *args)


def metric(value: Any, *args: Any) -> None:
    default_context().metric(value, *args)


def warn(value: Any, *args: Any) -> None:
    default_context().warn(value, *args)


def error(value: Any, *args: Any) -> LoggedError:
    return default_context().error(value, *args)


def critic(value: Any, *args: Any) -> LoggedError:
    return default_context().critic(value, *args)


def errorf(fmt: str, *fmt_args: Any) -> LoggedError:
    return default_context().errorf(fmt, *fmt_args)


def fatalf(fmt: str, *fmt_args: Any) -> NoReturn:
    default_context().fatalf(fmt, *fmt_args)


def with_context(tags: Mapping[str, Any] | None = None, **fields: Any) -> LogContext:
    return default_context().with_context(tags, **fields)


def with_metrics_context(metric_tags: Mapping[str, Any] | None = None, **fields: Any) -> LogContext:
    return default_context().with_metrics_context(metric_tags, **fields)


def transaction(name: str) -> LogContext:
    return default_context().transaction(name)


__all__ = [
    "default_logger",
    "default_context",
    "set_level",
    "set_level_by_name",
    "set_level_from_env",
    "push_metrics",
    "trace",
    "debug",
    "info",
    "metric",
    "warn",
    "error",
    "critic",
    "errorf",
    "fatalf",
    "with_context",
    "with_metrics_context",
    "transaction",
]
