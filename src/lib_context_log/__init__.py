"""Public package surface for the contextual logging and telemetry facade.

Import the package as ``log`` for the process-wide facade
(``log.info("ready", "boot", log.Tags({"port": 8080}))``) or build isolated
:class:`Logger` instances when tests or embedding applications need their own
configuration.
"""

from __future__ import annotations

from .adapters.backends.null import NullBackend
from .adapters.backends.recording import RecordingBackend
from .adapters.emitter.stream import StreamEmitter, render_line
from .application.arguments import EventLabel, MetricBatch, MetricTagSet, TagSet
from .application.dispatch import push_metric
from .application.ports import Backend, Emitter, SegmentHandle, TransactionHandle
from .application.timing import elapsed_milliseconds, minutes_since
from .application.tracing import Segment, Transaction, null_segment, start_transaction
from .context import LogContext, Logger
from .core import (
    critic,
    debug,
    default_context,
    default_logger,
    error,
    errorf,
    fatalf,
    info,
    metric,
    push_metrics,
    set_level,
    set_level_by_name,
    set_level_from_env,
    trace,
    transaction,
    warn,
    with_context,
    with_metrics_context,
)
from .domain.errors import (
    BackendError,
    ConfigurationError,
    ContractViolation,
    DispatchError,
    FatalError,
    LogContextError,
    LoggedError,
)
from .domain.levels import CRITIC, DEBUG, ERROR, FATAL, INFO, LEVEL_NAMES, METRIC, NONE, TRACE, WARN
from .domain.metrics import Metric, Metrics, MetricType, compound, counter, full, simple
from .domain.metrics import error as error_metric
from .domain.settings import LoggerSettings
from .domain.tags import MetricTags, Tags, merge_tags
from .observability import get_logger

__all__ = [
    "Backend",
    "BackendError",
    "ConfigurationError",
    "ContractViolation",
    "CRITIC",
    "DEBUG",
    "DispatchError",
    "ERROR",
    "Emitter",
    "EventLabel",
    "FATAL",
    "FatalError",
    "INFO",
    "LEVEL_NAMES",
    "LogContext",
    "LogContextError",
    "LoggedError",
    "Logger",
    "LoggerSettings",
    "METRIC",
    "Metric",
    "MetricBatch",
    "MetricTagSet",
    "MetricTags",
    "MetricType",
    "Metrics",
    "NONE",
    "NullBackend",
    "RecordingBackend",
    "Segment",
    "SegmentHandle",
    "StreamEmitter",
    "TRACE",
    "TagSet",
    "Tags",
    "Transaction",
    "TransactionHandle",
    "WARN",
    "compound",
    "counter",
    "critic",
    "debug",
    "default_context",
    "default_logger",
    "elapsed_milliseconds",
    "error",
    "error_metric",
    "errorf",
    "fatalf",
    "full",
    "get_logger",
    "info",
    "merge_tags",
    "metric",
    "minutes_since",
    "null_segment",
    "push_metric",
    "push_metrics",
    "render_line",
    "set_level",
    "set_level_by_name",
    "set_level_from_env",
    "simple",
    "start_transaction",
    "trace",
    "transaction",
    "warn",
    "with_context",
    "with_metrics_context",
]
