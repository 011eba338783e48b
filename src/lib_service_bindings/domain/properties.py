"""Domain-level result value objects.

Purpose
-------
Anchor the immutable :class:`Properties` mapping returned once binding
processing has finished. Keys are flat dotted configuration keys
(``spring.data.mongodb.host``); every key carries provenance telling which
processor and binding produced the winning value.

Contents
--------
* :class:`SourceInfo` – typed provenance record.
* :class:`Properties` – read-only ``Mapping`` with provenance lookups, a
  nested export, and functional overrides.
* :func:`nest` – expand dotted keys into nested dictionaries.
* :data:`EMPTY_PROPERTIES` – canonical empty instance.

System Role
-----------
:func:`lib_service_bindings.core.collect_properties` returns a
:class:`Properties` instance. Hosts either consume it as a flat property
source or call :meth:`Properties.as_nested` to feed tree-shaped configuration
systems.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, TypedDict, TypeVar, overload

from .errors import InvalidFormat


class SourceInfo(TypedDict):
    """Describe the origin of a resolved property.

    Attributes
    ----------
    layer:
        Processor label (``"mongodb"``, ``"cassandra@3"``) or merge layer name
        (``"defaults"``, ``"overrides"``).
    binding:
        Name of the binding whose entries produced the value, ``None`` for
        non-binding layers.
    path:
        Location of that binding, if any.
    key:
        The dotted destination key.
    """

    layer: str
    binding: str | None
    path: str | None
    key: str


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Properties(Mapping[str, Any]):
    """Immutable flat mapping of dotted keys produced by the dispatch pass.

    Examples
    --------
    >>> props = Properties(
    ...     {"spring.redis.host": "cache", "spring.redis.port": "6379"},
    ...     {"spring.redis.host": {"layer": "redis", "binding": "cache", "path": "/b/cache", "key": "spring.redis.host"}},
    ... )
    >>> props["spring.redis.host"]
    'cache'
    >>> props.origin("spring.redis.host")["binding"]
    'cache'
    >>> props.as_nested()["spring"]["redis"]["port"]
    '6379'
    """

    _data: Mapping[str, Any]
    _meta: Mapping[str, SourceInfo]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_data", MappingProxyType(dict(self._data)))
        object.__setattr__(self, "_meta", MappingProxyType(dict(self._meta)))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @overload
    def get(self, key: str, default: T) -> Any | T: ...

    @overload
    def get(self, key: str, default: None = ...) -> Any | None: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under the dotted *key* or ``default``."""

        return self._data.get(key, default)

    def origin(self, key: str) -> SourceInfo | None:
        """Return provenance for *key* or ``None`` when no layer produced it.

        Examples
        --------
        >>> Properties({"a.b": "1"}, {}).origin("a.b") is None
        True
        """

        return self._meta.get(key)

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable flat copy of the properties."""

        return dict(self._data)

    def as_nested(self) -> dict[str, Any]:
        """Expand dotted keys into a nested ``dict`` (see :func:`nest`)."""

        return nest(self._data)

    def provenance(self) -> dict[str, SourceInfo]:
        """Return a mutable copy of the provenance table."""

        return {key: SourceInfo(**info) for key, info in self._meta.items()}

    def to_json(self, *, indent: int | None = None, nested: bool = False) -> str:
        """Serialise the properties to JSON (flat by default).

        Examples
        --------
        >>> Properties({"spring.ldap.base": "dc=example"}, {}).to_json()
        '{"spring.ldap.base":"dc=example"}'
        """

        payload = self.as_nested() if nested else self.as_dict()
        return json.dumps(payload, indent=indent, separators=(",", ":"), ensure_ascii=False, default=str)

    def with_overrides(self, overrides: Mapping[str, Any]) -> Properties:
        """Return a copy with *overrides* applied; provenance of overridden keys is dropped.

        Examples
        --------
        >>> base = Properties({"spring.redis.host": "a"}, {})
        >>> base.with_overrides({"spring.redis.host": "b"})["spring.redis.host"], base["spring.redis.host"]
        ('b', 'a')
        """

        data = dict(self._data)
        data.update(overrides)
        meta = {key: info for key, info in self._meta.items() if key not in overrides}
        return Properties(data, meta)


def nest(flat: Mapping[str, Any]) -> dict[str, Any]:
    """Expand dotted keys into nested dictionaries.

    Why
    ----
    Tree-shaped configuration systems cannot consume ``a.b.c`` keys directly.

    Raises
    ------
    InvalidFormat
        When one key is a prefix of another (``a.b`` and ``a.b.c``) so the
        same node would have to be both a scalar and a mapping.

    Examples
    --------
    >>> nest({"spring.kafka.bootstrap-servers": "k:9092", "spring.kafka.consumer.bootstrap-servers": "k:9092"})
    {'spring': {'kafka': {'bootstrap-servers': 'k:9092', 'consumer': {'bootstrap-servers': 'k:9092'}}}}
    """

    result: dict[str, Any] = {}
    for dotted, value in flat.items():
        parts = dotted.split(".")
        cursor = result
        for part in parts[:-1]:
            child = cursor.setdefault(part, {})
            if not isinstance(child, dict):
                raise InvalidFormat(f"Cannot nest key {dotted}: {part} already holds a scalar")
            cursor = child
        if isinstance(cursor.get(parts[-1]), dict):
            raise InvalidFormat(f"Cannot nest key {dotted}: a nested mapping already exists there")
        cursor[parts[-1]] = value
    return result


EMPTY_PROPERTIES = Properties(MappingProxyType({}), MappingProxyType({}))
"""Canonical empty result returned when no binding contributed anything."""
