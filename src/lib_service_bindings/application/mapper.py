"""Declarative ``from_(...).to(...)`` mapper between binding entries and properties.

Purpose
-------
Give processors a tiny vocabulary for "copy this entry to that key" and
"combine these entries into that key" with two guarantees: a missing source
entry is a silent no-op, and a multi-key combination is written all-or-nothing
so a connection URL is never produced with a missing host.

Contents
--------
* :class:`MapMapper` – bound to one binding's entries and one destination.
* :class:`SingleSource` – result of ``from_(key)``; offers ``to(dest)``.
* :class:`MultiSource` – result of ``from_(k1, k2, ...)``; offers
  ``to(dest, combiner)``.

System Role
-----------
Every rule in :mod:`lib_service_bindings.application.rules` is evaluated
through a mapper. The mapper records the keys it wrote so the processor can
report provenance.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Callable, overload

from ..domain.errors import MappingError


class MapMapper:
    """Copy selected source entries into a shared destination mapping.

    Examples
    --------
    >>> destination = {}
    >>> mapper = MapMapper({"host": "db", "port": "5432"}, destination)
    >>> mapper.from_("host").to("spring.datasource.host")
    >>> mapper.from_("host", "port").to("spring.datasource.address", lambda h, p: f"{h}:{p}")
    >>> mapper.from_("host", "database").to("spring.datasource.url", lambda h, d: f"{h}/{d}")
    >>> destination
    {'spring.datasource.host': 'db', 'spring.datasource.address': 'db:5432'}
    """

    def __init__(self, source: Mapping[str, str], destination: MutableMapping[str, object]) -> None:
        self._source = source
        self._destination = destination
        self._written: list[str] = []

    @overload
    def from_(self, key: str, /) -> SingleSource: ...

    @overload
    def from_(self, first: str, second: str, /, *rest: str) -> MultiSource: ...

    def from_(self, *keys: str) -> SingleSource | MultiSource:
        """Select one source key (passthrough) or several (combination).

        Raises
        ------
        MappingError
            When called without any key.
        """

        if not keys:
            raise MappingError("from_() requires at least one source key")
        if len(keys) == 1:
            return SingleSource(self, keys[0])
        return MultiSource(self, keys)

    def put(self, key: str, value: object) -> None:
        """Write *value* unconditionally; used by side-effect rules."""

        self._destination[key] = value
        self._written.append(key)

    @property
    def written(self) -> tuple[str, ...]:
        """Destination keys written through this mapper, in write order."""

        return tuple(self._written)

    def _lookup(self, keys: tuple[str, ...]) -> list[str] | None:
        values: list[str] = []
        for key in keys:
            if key not in self._source:
                return None
            values.append(self._source[key])
        return values


class SingleSource:
    """Single-key selector; only supports a plain ``to(destination)``."""

    __slots__ = ("_mapper", "_key")

    def __init__(self, mapper: MapMapper, key: str) -> None:
        self._mapper = mapper
        self._key = key

    def to(self, destination: str) -> None:
        """Copy the entry to *destination* when present; otherwise do nothing."""

        values = self._mapper._lookup((self._key,))
        if values is not None:
            self._mapper.put(destination, values[0])


class MultiSource:
    """Multi-key selector; ``to`` requires a combiner over all selected values."""

    __slots__ = ("_mapper", "_keys")

    def __init__(self, mapper: MapMapper, keys: tuple[str, ...]) -> None:
        self._mapper = mapper
        self._keys = keys

    def to(self, destination: str, combiner: Callable[..., object]) -> None:
        """Write ``combiner(*values)`` when every selected entry is present."""

        values = self._mapper._lookup(self._keys)
        if values is not None:
            self._mapper.put(destination, combiner(*values))
