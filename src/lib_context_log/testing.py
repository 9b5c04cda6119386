"""Test helpers that make emitted lines and backend calls inspectable.

Purpose
    Let test suites (this one and downstream ones) build an isolated
    :class:`~lib_context_log.context.Logger` whose output lands in memory
    instead of on stdout, and read emitted lines back as dictionaries.

Contents
    - ``CapturedLogger``: bundle of the logger, its recording backend and its
      stream.
    - ``capture_logger``: builds a ``CapturedLogger``.
    - ``parse_line``: turns a ``[key:value]...`` line back into a dict.

System Integration
    Used by the unit, application and end-to-end suites and by the CLI
    ``emit`` dry run.
"""

from __future__ import annotations

import io
import re
from dataclasses import dataclass
from typing import Final

from .adapters.backends.recording import RecordingBackend
from .adapters.emitter.stream import StreamEmitter
from .context import LogContext, Logger
from .domain.levels import TRACE
from .domain.settings import LoggerSettings

_FRAGMENT: Final[re.Pattern[str]] = re.compile(r"\[([^:\]]+):([^\]]*)\]")


def parse_line(line: str) -> dict[str, str]:
    """Parse an emitted line into a mapping of rendered values.

    Keys and values must not contain ``]``; keys must not contain ``:``.

    Examples
    --------
    >>> parse_line("[level:info][message:ready][port:8080]")
    {'level': 'info', 'message': 'ready', 'port': '8080'}
    """

    return {key: value for key, value in _FRAGMENT.findall(line)}


@dataclass(frozen=True)
class CapturedLogger:
    """Logger wired to in-memory collaborators."""

    logger: Logger
    backend: RecordingBackend
    stream: io.StringIO

    @property
    def context(self) -> LogContext:
        return self.logger.context()

    def lines(self) -> list[dict[str, str]]:
        """Return every emitted line parsed with :func:`parse_line`."""

        return [parse_line(line) for line in self.stream.getvalue().splitlines() if line]


def capture_logger(
    level: int = TRACE,
    *,
    prefix: str | None = None,
    environment: str = "test",
) -> CapturedLogger:
    """Return a logger emitting into a ``StringIO`` and recording backend calls.

    Passing *prefix* enables metric forwarding the way
    :meth:`Logger.push_metrics` does.

    Examples
    --------
    >>> captured = capture_logger(prefix="svc")
    >>> captured.context.info("ready")
    >>> captured.lines()[0]["message"]
    'ready'
    """

    backend = RecordingBackend()
    stream = io.StringIO()
    logger = Logger(LoggerSettings(level=level), backend=backend, emitter=StreamEmitter(stream))
    if prefix is not None:
        logger.push_metrics(prefix, environment)
    return CapturedLogger(logger, backend, stream)
