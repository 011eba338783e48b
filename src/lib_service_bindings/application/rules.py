"""Mapping rules: the data that processor tables are made of.

Purpose
-------
Express every processor as an ordered tuple of small, frozen rule records
evaluated by one interpreter (:meth:`Rule.apply`). Plain renames dominate;
a handful of rule kinds cover composite values and capability-driven choices.

Contents
--------
* :class:`Rule` – protocol implemented by every rule.
* :class:`Rename` – one entry copied to one destination key.
* :class:`Compose` – several entries combined by a function.
* :class:`ProtocolChoice` – picks a literal depending on a capability probe.
* :class:`DatabaseUrl` – ``host``/``port``/``database`` formatted into a URL.
* :class:`DriverClass` – publishes the first available driver candidate.
* :func:`renames` – expand a list of entry names under a common prefix.

System Role
-----------
Consumed by :class:`lib_service_bindings.application.processor.MappingProcessor`;
the per-service tables live in :mod:`lib_service_bindings.processors`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol

from .mapper import MapMapper

if TYPE_CHECKING:
    from .processor import ProcessContext


class Rule(Protocol):
    """A single step of a processor table."""

    def apply(self, mapper: MapMapper, context: ProcessContext) -> None:
        """Evaluate the rule against one binding's mapper."""


@dataclass(frozen=True, slots=True)
class Rename:
    """Copy entry ``source`` to property ``destination`` when present."""

    source: str
    destination: str

    def apply(self, mapper: MapMapper, context: ProcessContext) -> None:
        mapper.from_(self.source).to(self.destination)


@dataclass(frozen=True, slots=True)
class Compose:
    """Write ``combiner(*values)`` when every entry in ``sources`` is present."""

    sources: tuple[str, ...]
    destination: str
    combiner: Callable[..., object]

    def apply(self, mapper: MapMapper, context: ProcessContext) -> None:
        mapper.from_(*self.sources).to(self.destination, self.combiner)


@dataclass(frozen=True, slots=True)
class ProtocolChoice:
    """Choose ``present`` when the probe reports ``component``, else ``absent``.

    Examples
    --------
    >>> choice = ProtocolChoice("org.mariadb.r2dbc.MariadbConnection", "mariadb", "mysql")
    >>> choice.resolve(lambda component: False)
    'mysql'
    """

    component: str
    present: str
    absent: str

    def resolve(self, probe: Callable[[str], bool]) -> str:
        return self.present if probe(self.component) else self.absent


@dataclass(frozen=True, slots=True)
class DatabaseUrl:
    """Compose ``host``, ``port`` and ``database`` entries into a connection URL.

    ``template`` is a :meth:`str.format` pattern with the fields ``protocol``,
    ``host``, ``port`` and ``database``. Nothing is written unless all three
    entries exist.
    """

    destination: str
    template: str
    protocol: str | ProtocolChoice = ""

    def apply(self, mapper: MapMapper, context: ProcessContext) -> None:
        protocol = self.protocol.resolve(context.probe) if isinstance(self.protocol, ProtocolChoice) else self.protocol
        template = self.template

        def combine(host: str, port: str, database: str) -> str:
            return template.format(protocol=protocol, host=host, port=port, database=database)

        mapper.from_("host", "port", "database").to(self.destination, combine)


@dataclass(frozen=True, slots=True)
class DriverClass:
    """Publish the first of ``candidates`` the capability probe reports available.

    Candidates are probed in order; when none is available nothing is written.
    The rule does not depend on any binding entry.
    """

    destination: str
    candidates: tuple[str, ...]

    def apply(self, mapper: MapMapper, context: ProcessContext) -> None:
        for candidate in self.candidates:
            if context.probe(candidate):
                mapper.put(self.destination, candidate)
                return


def renames(prefix: str, *keys: str) -> tuple[Rename, ...]:
    """Return one :class:`Rename` per key, mapping ``key`` to ``<prefix>.<key>``.

    Examples
    --------
    >>> renames("spring.ldap", "base", "urls")
    (Rename(source='base', destination='spring.ldap.base'), Rename(source='urls', destination='spring.ldap.urls'))
    """

    return tuple(Rename(key, f"{prefix}.{key}") for key in keys)
