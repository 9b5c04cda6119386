"""Immutable tag maps and their merge rule.

Purpose
-------
Model the atomic unit of logging context: a string-keyed mapping of scalar
values attached to an emitted line or to a forwarded metric. Everything that
combines two tag scopes (context tags with call-site tags, default metric tags
with per-record tags) goes through :func:`merge_tags`.

Contents
--------
* :class:`Tags` – read-only mapping for tags rendered on the emitted line.
* :class:`MetricTags` – distinct mapping type carrying tags that only reach the
  telemetry backend.
* :func:`merge_tags` – left-to-right merge where later mappings win.
* :func:`as_metric_tags` – flatten a mapping into ``"key:value"`` strings.
* :data:`EMPTY_TAGS` / :data:`EMPTY_METRIC_TAGS` – canonical empty instances.

System Role
-----------
Domain layer; no I/O. Log contexts, the argument classifier and the metric
dispatcher all depend on these types.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, TypeVar

TagsT = TypeVar("TagsT", bound="Tags")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Tags(MappingABC[str, Any]):
    """Read-only tag mapping; every merge yields a new instance.

    Why
    ----
    Contexts are shared between call sites and threads, so a derived scope must
    never leak back into its parent.

    What
    ----
    Wraps a copy of the supplied mapping in ``MappingProxyType`` and implements
    the :class:`Mapping` protocol. Equality follows mapping semantics, so a
    ``Tags`` compares equal to a plain ``dict`` with the same items.

    Examples
    --------
    >>> base = Tags({"a": 1})
    >>> base.merge({"a": 2, "b": 3}) == {"a": 2, "b": 3}
    True
    >>> base
    Tags({'a': 1})
    """

    _data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_data", MappingProxyType(dict(self._data)))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._data)!r})"

    def merge(self: TagsT, *others: Mapping[str, Any]) -> TagsT:
        """Return a new map of the same type with *others* applied left to right."""

        if not others:
            return self
        merged = dict(self._data)
        for other in others:
            merged.update(other)
        return type(self)(merged)

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable shallow copy."""

        return dict(self._data)


class MetricTags(Tags):
    """Tags forwarded to the telemetry backend only, never rendered on the line.

    A separate type lets call sites pass both kinds of tags positionally and
    still have them routed to the right scope.
    """

    __slots__ = ()


EMPTY_TAGS = Tags()
EMPTY_METRIC_TAGS = MetricTags()


def merge_tags(*maps: Mapping[str, Any]) -> Tags:
    """Merge *maps* left to right; later mappings win on key conflicts.

    The result keeps the type of the first argument when it is a :class:`Tags`
    subclass, otherwise a plain :class:`Tags` is returned.

    Examples
    --------
    >>> merge_tags({"a": 1}, {"a": 2}) == {"a": 2}
    True
    >>> type(merge_tags(MetricTags({"x": 1}), {"y": 2})).__name__
    'MetricTags'
    """

    if not maps:
        return EMPTY_TAGS
    first, *rest = maps
    base = first if isinstance(first, Tags) else Tags(first)
    return base.merge(*rest)


def as_metric_tags(tags: Mapping[str, Any]) -> list[str]:
    """Render *tags* as ``"key:value"`` strings (order follows the mapping).

    Examples
    --------
    >>> as_metric_tags({"cluster": "prod", "shard": 3})
    ['cluster:prod', 'shard:3']
    """

    return [f"{key}:{value}" for key, value in tags.items()]
