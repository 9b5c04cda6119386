"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the log context, the dispatcher and
consuming applications. Two families exist side by side:

* fatal contract violations (:class:`FatalError` and subclasses) that the
  library raises and never catches;
* recoverable failures (:class:`DispatchError`, :class:`BackendError`) that
  the log context reports as nested error lines before carrying on.

Contents
--------
* :class:`LogContextError` – umbrella base class.
* :class:`FatalError` – base for errors that must abort the caller.
* :class:`ConfigurationError` – unknown level name at startup.
* :class:`ContractViolation` – unsupported argument passed to a log verb.
* :class:`DispatchError` – metric record with an unknown type.
* :class:`BackendError` – the telemetry backend failed to record a metric.
* :class:`LoggedError` – value returned by ``error``/``critic``/``errorf``.
"""

from __future__ import annotations


class LogContextError(Exception):
    """Base type for all exceptions emitted by ``lib_context_log``."""


class FatalError(LogContextError):
    """Programmer or deployment mistake; the library never catches these.

    Why
    ----
    A misconfigured logger or a malformed call site should surface during
    development instead of silently dropping observability data.
    """


class ConfigurationError(FatalError):
    """Raised when a level name (e.g. from ``LOG_LEVEL``) is not recognised."""


class ContractViolation(FatalError):
    """Raised when a log verb receives an argument outside the supported shapes.

    Supported shapes are event labels (``str``), tag mappings, metric tag maps
    and metric batches.
    """


class DispatchError(LogContextError):
    """Raised when a metric record carries a type the dispatcher cannot route.

    Recoverable: the log context reports it as a nested error line.
    """


class BackendError(LogContextError):
    """Wraps an exception raised by the telemetry backend while recording.

    Recoverable: never escalated to the caller of the original log verb.
    """


class LoggedError(LogContextError):
    """Error value handed back by ``error``, ``critic`` and ``errorf``.

    Returned whether or not the line passed the level gate, so callers may
    ``raise`` it or keep propagating it.
    """
