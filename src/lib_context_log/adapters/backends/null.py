"""Backend used while metric forwarding and tracing are disabled.

Every recording call is a no-op and no span handles are produced, so
transactions created against it are degenerate and their segments are null
segments.
"""

from __future__ import annotations

from ...application.ports import SegmentHandle, TransactionHandle


class NullBackend:
    """Accept every telemetry call and do nothing."""

    def record_full_metric(self, name: str, value: float, *tags: str) -> None:
        return None

    def record_simple_metric(self, name: str, value: float, *tags: str) -> None:
        return None

    def record_compound_metric(self, name: str, value: float, *tags: str) -> None:
        return None

    def start_transaction(self, name: str) -> TransactionHandle | None:
        return None

    def start_segment(self, transaction: TransactionHandle, name: str) -> SegmentHandle | None:
        return None
