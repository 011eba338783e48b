"""Binding value objects.

Purpose
-------
Model the service bindings discovered on disk: one :class:`Binding` per bound
external service and the ordered, immutable :class:`Bindings` collection the
processors filter by type. The module performs no I/O.

Contents
--------
* :data:`TYPE` / :data:`PROVIDER` – reserved entry names.
* :class:`Binding` – name, location, and read-only entries.
* :class:`Bindings` – ordered ``Sequence`` of bindings with
  :meth:`Bindings.filter_bindings`.

System Role
-----------
Produced by :mod:`lib_service_bindings.adapters.filesystem.default` and
consumed by every processor. Both types are frozen so a dispatch pass can
share them freely.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, overload

TYPE = "type"
"""Reserved entry holding the binding's declared service type."""

PROVIDER = "provider"
"""Reserved entry holding the (diagnostic only) binding provider."""


@dataclass(frozen=True, slots=True)
class Binding:
    """A named set of key/value entries describing one bound service.

    Why
    ----
    Processors need a stable, read-only view of one service's credentials and
    connection details together with where they came from.

    Attributes
    ----------
    name:
        Binding name (the directory name on disk).
    location:
        Origin of the binding, used for diagnostics only.
    entries:
        Entry name to entry value. Wrapped in ``MappingProxyType`` on
        construction so the binding cannot be mutated afterwards.

    Examples
    --------
    >>> binding = Binding("orders-db", Path("/bindings/orders-db"), {"type": "mysql", "host": "db"})
    >>> binding.type, binding.provider, binding.get("host")
    ('mysql', None, 'db')
    """

    name: str
    location: Path
    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @property
    def type(self) -> str | None:
        """Return the declared type or ``None`` when the ``type`` entry is absent."""

        return self.entries.get(TYPE)

    @property
    def provider(self) -> str | None:
        """Return the optional provider entry."""

        return self.entries.get(PROVIDER)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.entries.get(key, default)


class Bindings(Sequence[Binding]):
    """Immutable, ordered collection of :class:`Binding` records.

    Why
    ----
    Discovery order doubles as the tie-break for last-writer-wins between two
    bindings of the same type, so the collection must never reorder.

    Examples
    --------
    >>> bindings = Bindings([
    ...     Binding("a", Path("a"), {"type": "redis"}),
    ...     Binding("b", Path("b"), {"type": "mongodb"}),
    ...     Binding("c", Path("c"), {"type": "redis"}),
    ... ])
    >>> [binding.name for binding in bindings.filter_bindings("redis")]
    ['a', 'c']
    >>> bindings.filter_bindings("kafka")
    []
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Binding] = ()) -> None:
        self._items: tuple[Binding, ...] = tuple(items)

    @overload
    def __getitem__(self, index: int) -> Binding: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Binding]: ...

    def __getitem__(self, index: int | slice) -> Binding | Sequence[Binding]:
        return self._items[index]

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Bindings({[binding.name for binding in self._items]!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bindings):
            return NotImplemented
        return self._items == other._items

    def filter_bindings(self, type: str) -> list[Binding]:  # noqa: A002 - mirrors the reserved entry name
        """Return every binding whose ``type`` entry equals *type* (case-sensitive).

        Bindings without a ``type`` entry never match. The result keeps
        discovery order and is empty, not an error, when nothing matches.
        """

        return [binding for binding in self._items if binding.type == type]


EMPTY_BINDINGS = Bindings()
"""Shared empty collection returned when no root produced a binding."""
