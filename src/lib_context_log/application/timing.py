"""Timing helpers for building metric values.

Call sites usually record latencies as FULL metrics::

    started = time.perf_counter()
    ...
    ctx.info("done", full("latency_ms", elapsed_milliseconds(started)))
"""

from __future__ import annotations

import time
from datetime import datetime, timezone


def elapsed_milliseconds(started: float) -> float:
    """Return milliseconds elapsed since a :func:`time.perf_counter` mark."""

    return (time.perf_counter() - started) * 1000.0


def minutes_since(moment: datetime) -> float:
    """Return minutes elapsed since *moment*; naive datetimes are taken as local time."""

    now = datetime.now(timezone.utc) if moment.tzinfo is not None else datetime.now()
    return (now - moment).total_seconds() / 60.0
