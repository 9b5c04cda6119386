"""In-memory backend that records every call in order.

Purpose
-------
Give tests and the CLI dry run a backend whose effects can be inspected:
metric recordings, span starts/ends and error notifications all land in one
ordered journal, so relative ordering (``notice_error`` before the metric
call, a single ``end`` per span) is observable.

Contents
--------
* :class:`RecordedCall` – one journal entry.
* :class:`RecordingBackend` – the backend adapter.
* :class:`RecordedTransaction` / :class:`RecordedSegment` – span handles that
  write into the owning backend's journal.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from threading import Lock
from typing import Any


@dataclass(frozen=True, slots=True)
class RecordedCall:
    """Single backend interaction.

    ``method`` is the backend or handle method name; ``name`` the metric or
    span name; ``value`` and ``tags`` are only set for metric recordings.
    """

    method: str
    name: str
    value: float | None = None
    tags: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["tags"] = sorted(self.tags)
        return payload


class RecordingBackend:
    """Backend adapter keeping a thread-safe journal of calls."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._calls: list[RecordedCall] = []

    @property
    def calls(self) -> list[RecordedCall]:
        """Snapshot of the journal in call order."""

        with self._lock:
            return list(self._calls)

    def record(self, call: RecordedCall) -> None:
        with self._lock:
            self._calls.append(call)

    def clear(self) -> None:
        with self._lock:
            self._calls.clear()

    def methods(self) -> list[str]:
        """Return the method names of the journal, in order."""

        return [call.method for call in self.calls]

    def metric_calls(self) -> list[RecordedCall]:
        """Return only the metric recordings."""

        return [call for call in self.calls if call.method.startswith("record_")]

    def record_full_metric(self, name: str, value: float, *tags: str) -> None:
        self.record(RecordedCall("record_full_metric", name, value, tags))

    def record_simple_metric(self, name: str, value: float, *tags: str) -> None:
        self.record(RecordedCall("record_simple_metric", name, value, tags))

    def record_compound_metric(self, name: str, value: float, *tags: str) -> None:
        self.record(RecordedCall("record_compound_metric", name, value, tags))

    def start_transaction(self, name: str) -> RecordedTransaction:
        self.record(RecordedCall("start_transaction", name))
        return RecordedTransaction(self, name)

    def start_segment(self, transaction: RecordedTransaction, name: str) -> RecordedSegment:
        self.record(RecordedCall("start_segment", name))
        return RecordedSegment(self, name)


class RecordedTransaction:
    """Transaction handle journaling ``notice_error`` and ``end``."""

    def __init__(self, backend: RecordingBackend, name: str) -> None:
        self.backend = backend
        self.name = name

    def notice_error(self, name: str) -> None:
        self.backend.record(RecordedCall("notice_error", name))

    def end(self) -> None:
        self.backend.record(RecordedCall("end_transaction", self.name))


class RecordedSegment:
    """Segment handle journaling ``end``."""

    def __init__(self, backend: RecordingBackend, name: str) -> None:
        self.backend = backend
        self.name = name

    def end(self) -> None:
        self.backend.record(RecordedCall("end_segment", self.name))
