"""Severity levels and the named-level table.

A call at severity ``S`` is emitted iff the configured threshold is ``<= S``.
Several names share a severity (``INFO``/``METRIC``, ``ERROR``/``CRITIC``/
``FATAL``); the table only exposes the names accepted by ``LOG_LEVEL``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

from .errors import ConfigurationError

TRACE: Final[int] = -1
DEBUG: Final[int] = 0
INFO: Final[int] = 1
METRIC: Final[int] = 1
WARN: Final[int] = 2
ERROR: Final[int] = 4
CRITIC: Final[int] = 4
FATAL: Final[int] = 4
NONE: Final[int] = 100

LEVEL_NAMES: Final[Mapping[str, int]] = MappingProxyType(
    {
        "TRACE": TRACE,
        "DEBUG": DEBUG,
        "INFO": INFO,
        "WARN": WARN,
        "ERROR": ERROR,
        "CRITIC": CRITIC,
        "FATAL": FATAL,
        "NONE": NONE,
    }
)


def level_by_name(name: str) -> int:
    """Return the threshold registered under *name* (case-insensitive).

    Raises
    ------
    ConfigurationError
        When *name* is not in :data:`LEVEL_NAMES`. Callers are not expected to
        recover: a misconfigured logger must not start.

    Examples
    --------
    >>> level_by_name("debug")
    0
    >>> level_by_name("verbose")
    Traceback (most recent call last):
    ...
    lib_context_log.domain.errors.ConfigurationError: Invalid log level: verbose
    """

    try:
        return LEVEL_NAMES[name.strip().upper()]
    except KeyError as exc:
        raise ConfigurationError(f"Invalid log level: {name}") from exc


def is_enabled(threshold: int, severity: int) -> bool:
    """Return ``True`` when a call at *severity* passes *threshold*."""

    return threshold <= severity
