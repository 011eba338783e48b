"""Generic, data-driven binding processor.

Purpose
-------
Implement the processor contract once. A service type is described by a
:class:`MappingProcessor` record (type, optional host major version, rule
table) instead of a class per type and per host version.

Contents
--------
* :class:`ProcessContext` – capability probe, host version resolver, and an
  optional provenance sink shared by one dispatch pass.
* :class:`MappingProcessor` – guards, type filter, rule evaluation.

System Role
-----------
Instances are registered, in order, with
:class:`lib_service_bindings.application.dispatch.Dispatcher`. Each
invocation is stateless and ends either "skipped" (a guard failed) or
"applied" (all rules ran for all matching bindings).
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Callable

from ..domain.binding import Binding, Bindings
from ..domain.properties import SourceInfo
from ..observability import log_debug, make_event
from .guards import HostVersionResolver, is_type_enabled
from .mapper import MapMapper
from .ports import EnvironmentSource
from .rules import Rule


def _no_capabilities(component: str) -> bool:
    return False


@dataclass(frozen=True, slots=True)
class ProcessContext:
    """Collaborators injected into every processor of a dispatch pass.

    Attributes
    ----------
    probe:
        Capability probe. Defaults to "nothing optional is available".
    versions:
        Host version resolver. Defaults to an unresolved host, so
        version-scoped processors skip.
    provenance:
        Optional sink receiving a :class:`SourceInfo` per written key; the
        latest write wins, mirroring the destination.
    """

    probe: Callable[[str], bool] = _no_capabilities
    versions: HostVersionResolver = field(default_factory=HostVersionResolver)
    provenance: MutableMapping[str, SourceInfo] | None = None

    def record(self, layer: str, binding: Binding, keys: tuple[str, ...]) -> None:
        if self.provenance is None:
            return
        for key in keys:
            self.provenance[key] = SourceInfo(layer=layer, binding=binding.name, path=str(binding.location), key=key)


@dataclass(frozen=True, slots=True)
class MappingProcessor:
    """Project every binding of ``type`` into destination keys through ``rules``.

    Attributes
    ----------
    type:
        Binding type this processor consumes (exact match).
    rules:
        Ordered rule table; later rules overwrite earlier ones.
    host_version:
        When set, the processor only runs if the host major version equals it.

    Examples
    --------
    >>> from pathlib import Path
    >>> from lib_service_bindings.adapters.env.default import DefaultEnvironmentSource
    >>> from lib_service_bindings.application.rules import renames
    >>> processor = MappingProcessor("ldap", renames("spring.ldap", "base"))
    >>> bindings = Bindings([Binding("dir", Path("dir"), {"type": "ldap", "base": "dc=example"})])
    >>> destination = {}
    >>> processor.process(DefaultEnvironmentSource(environ={}), bindings, destination)
    >>> destination
    {'spring.ldap.base': 'dc=example'}
    """

    type: str
    rules: tuple[Rule, ...]
    host_version: int | None = None

    @property
    def label(self) -> str:
        """Return ``type`` or ``type@<major>`` for version-scoped variants."""

        return self.type if self.host_version is None else f"{self.type}@{self.host_version}"

    def process(
        self,
        environment: EnvironmentSource,
        bindings: Bindings,
        destination: MutableMapping[str, object],
        context: ProcessContext | None = None,
    ) -> None:
        """Apply guards and run the rule table for every matching binding.

        Side Effects
        ------------
        Mutates *destination* only. Emits ``processor_skipped`` or
        ``processor_applied`` debug events.
        """

        context = context or ProcessContext()
        if not is_type_enabled(environment, self.type):
            log_debug("processor_skipped", **make_event(self.label, None, {"reason": "disabled"}))
            return
        if self.host_version is not None and not context.versions.is_major_version_enabled(self.host_version):
            log_debug("processor_skipped", **make_event(self.label, None, {"reason": "host_version"}))
            return

        for binding in bindings.filter_bindings(self.type):
            mapper = MapMapper(binding.entries, destination)
            for rule in self.rules:
                rule.apply(mapper, context)
            context.record(self.label, binding, mapper.written)
            log_debug("processor_applied", **make_event(self.label, binding.name, {"keys": len(mapper.written)}))
