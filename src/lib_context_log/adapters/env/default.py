"""Environment variable adapter for the level threshold.

Purpose
-------
Read ``LOG_LEVEL`` and translate it into a numeric threshold. This is the only
environment lookup the library performs.

Key behaviours
--------------
* The name is matched case-insensitively against the level table.
* An absent or empty variable yields ``None`` so the current threshold stays.
* An unknown name raises :class:`~lib_context_log.domain.errors.ConfigurationError`.
"""

from __future__ import annotations

import os
from typing import Final, Mapping

from ...domain.levels import level_by_name
from ...observability import log_debug

LOG_LEVEL_VARIABLE: Final[str] = "LOG_LEVEL"


class DefaultEnvLoader:
    """Resolve the threshold from a process environment mapping."""

    def __init__(self, *, environ: Mapping[str, str] | None = None, variable: str = LOG_LEVEL_VARIABLE) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        variable:
            Variable name, ``LOG_LEVEL`` unless overridden.
        """

        self._environ = environ if environ is not None else os.environ
        self._variable = variable

    def load(self) -> int | None:
        """Return the threshold named by the variable, or ``None`` when unset.

        Examples
        --------
        >>> DefaultEnvLoader(environ={"LOG_LEVEL": "warn"}).load()
        2
        >>> DefaultEnvLoader(environ={}).load() is None
        True
        """

        raw = self._environ.get(self._variable, "")
        if not raw:
            return None
        level = level_by_name(raw)
        log_debug("env_level_loaded", variable=self._variable, level=level)
        return level
