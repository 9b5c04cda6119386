"""Transaction and segment lifecycle.

Purpose
-------
Wrap backend trace handles in objects whose ``end()`` is safe to call any
number of times. The "already ended" state is tracked here under a lock
instead of trusting every backend to tolerate a second ``end()``.

Contents
--------
* :class:`Segment` – child span; :func:`null_segment` builds one without a
  backend handle.
* :class:`Transaction` – top-level span that creates segments and receives
  error notifications.
* :func:`start_transaction` – open a transaction on a backend.

System Role
-----------
Log contexts hold at most one :class:`Transaction`; derived contexts share it.
Both types are context managers so ``with`` blocks end them.
"""

from __future__ import annotations

from contextvars import Token
from threading import Lock
from types import TracebackType
from typing import Optional

from ..observability import bind_transaction, log_debug, make_event, reset_transaction
from .ports import Backend, SegmentHandle, TransactionHandle


class Segment:
    """Child span with an idempotent :meth:`end`.

    Examples
    --------
    >>> segment = null_segment()
    >>> segment.end(); segment.end()
    >>> segment.ended
    False
    """

    __slots__ = ("name", "_handle", "_lock", "_ended")

    def __init__(self, handle: SegmentHandle | None = None, name: str = "") -> None:
        self.name = name
        self._handle = handle
        self._lock = Lock()
        self._ended = False

    @property
    def live(self) -> bool:
        """``True`` while a backend handle exists and has not been ended."""

        return self._handle is not None and not self._ended

    @property
    def ended(self) -> bool:
        return self._ended

    def end(self) -> None:
        """End the backend span once; later calls and handle-less segments do nothing."""

        with self._lock:
            if self._handle is None or self._ended:
                return
            self._ended = True
        self._handle.end()

    def __enter__(self) -> Segment:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.end()


def null_segment() -> Segment:
    """Return a segment without backend handle so call sites can always ``end()`` it."""

    return Segment()


class Transaction:
    """Trace span representing one logical unit of work.

    A transaction without a backend handle is degenerate but fully usable:
    segments can be created and ``end()`` is a no-op.
    """

    __slots__ = ("name", "_handle", "_backend", "_lock", "_ended", "_token")

    def __init__(self, handle: TransactionHandle | None, backend: Backend, name: str = "") -> None:
        self.name = name
        self._handle = handle
        self._backend = backend
        self._lock = Lock()
        self._ended = False
        self._token: Token[str | None] | None = None

    @property
    def live(self) -> bool:
        return self._handle is not None and not self._ended

    @property
    def ended(self) -> bool:
        return self._ended

    def segment(self, name: str) -> Segment:
        """Start a child span named *name*."""

        if not self.live:
            return Segment(name=name)
        return Segment(self._backend.start_segment(self._handle, name), name)

    def notice_error(self, name: str) -> None:
        """Report an error called *name* on the live span."""

        if self.live:
            self._handle.notice_error(name)

    def end(self) -> None:
        """End the backend span once; repeated calls are no-ops."""

        with self._lock:
            if self._handle is None or self._ended:
                return
            self._ended = True
        self._handle.end()
        log_debug("transaction_ended", **make_event("end_transaction", self.name))

    def __enter__(self) -> Transaction:
        self._token = bind_transaction(self.name)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is not None:
                self.notice_error(exc_type.__name__)
            self.end()
        finally:
            if self._token is not None:
                reset_transaction(self._token)
                self._token = None


def start_transaction(backend: Backend, name: str) -> Transaction:
    """Open a backend transaction called *name* and wrap it."""

    transaction = Transaction(backend.start_transaction(name), backend, name)
    log_debug("transaction_started", **make_event("start_transaction", name, {"live": transaction.live}))
    return transaction
