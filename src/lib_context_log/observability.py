"""Self-diagnostics for the library's own machinery.

Purpose
    Report what the facade itself does (transactions started, metrics pushed
    or rejected, thresholds changed) through the standard :mod:`logging`
    package, separately from the ``[key:value]`` lines the facade emits for
    its callers. Silent by default.

Contents
    - ``ACTIVE_TRANSACTION``: context variable naming the transaction entered
      via ``with``.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_transaction`` / ``reset_transaction``: scope the active
      transaction name.
    - ``log_debug`` / ``log_error``: emit structured entries via a single
      private emitter.
    - ``make_event``: convenience builder for structured event payloads.

System Integration
    Used by the dispatcher, tracing helpers and the logger runtime so every
    diagnostic carries the active transaction name.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Any, Final, Mapping

ACTIVE_TRANSACTION: ContextVar[str | None] = ContextVar("lib_context_log_transaction", default=None)
"""Name of the transaction currently entered as a context manager.

Why
    Diagnostics emitted deep inside the dispatcher should name the unit of
    work they belong to without threading the transaction through every call.
"""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_context_log")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def bind_transaction(name: str | None) -> Token[str | None]:
    """Bind *name* as the active transaction and return the reset token.

    Examples
    --------
    >>> token = bind_transaction("checkout")
    >>> ACTIVE_TRANSACTION.get()
    'checkout'
    >>> reset_transaction(token)
    >>> ACTIVE_TRANSACTION.get() is None
    True
    """

    return ACTIVE_TRANSACTION.set(name)


def reset_transaction(token: Token[str | None]) -> None:
    """Restore the binding that was active before :func:`bind_transaction`."""

    ACTIVE_TRANSACTION.reset(token)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug entry that includes the active transaction."""

    _emit(logging.DEBUG, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error entry that includes the active transaction."""

    _emit(logging.ERROR, message, fields)


def make_event(
    operation: str,
    name: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured payload for facade lifecycle events.

    Examples
    --------
    >>> make_event('push_metric', 'svc.hits', {'type': 'S'})
    {'operation': 'push_metric', 'name': 'svc.hits', 'type': 'S'}
    """

    event: dict[str, Any] = {"operation": operation, "name": name}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    if not _LOGGER.isEnabledFor(level):
        return
    context = {"transaction": ACTIVE_TRANSACTION.get()}
    context.update(fields)
    _LOGGER.log(level, message, extra={"context": context})
