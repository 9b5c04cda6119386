"""Line emitter writing ``[key:value]`` fragments to a text stream.

Purpose
-------
Serialise a fully merged tag set as one line and write it atomically with
respect to other threads sharing the same stream.

Key behaviours
--------------
* Fragment order follows the mapping's iteration order; consumers must not
  rely on it.
* Floats holding an integral value render without a trailing ``.0`` so
  counters read ``[hits:1]``.
* The default stream is looked up on ``sys.stdout`` at write time, which keeps
  redirection (and pytest's ``capsys``) working after construction.
"""

from __future__ import annotations

import math
import sys
from threading import Lock
from typing import Any, Mapping, TextIO


def render_value(value: Any) -> str:
    """Render a tag value the way it appears on the line.

    Examples
    --------
    >>> render_value(1.0), render_value(2.5), render_value("x"), render_value(None)
    ('1', '2.5', 'x', 'None')
    """

    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def render_line(tags: Mapping[str, Any]) -> str:
    """Concatenate ``[key:value]`` fragments for every entry of *tags*.

    Examples
    --------
    >>> render_line({"level": "debug", "message": "x"})
    '[level:debug][message:x]'
    """

    return "".join(f"[{key}:{render_value(value)}]" for key, value in tags.items())


class StreamEmitter:
    """Write rendered lines to *stream* (``sys.stdout`` when omitted)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def emit(self, tags: Mapping[str, Any]) -> None:
        """Render *tags* and write the line in one locked ``write`` call."""

        line = render_line(tags) + "\n"
        with self._lock:
            stream = self.stream
            stream.write(line)
            stream.flush()
