"""Capability probe adapters.

Purpose
-------
Implement :class:`lib_service_bindings.application.ports.CapabilityProbe` in
the ways a Python process can answer "is optional component X available":
importability of a module, an explicit allow-list, or a combination.

Contents
--------
* :class:`ImportProbe` – ``importlib.util.find_spec`` based lookup.
* :class:`StaticProbe` – fixed set of available component identifiers.
* :class:`ChainedProbe` – ``True`` when any delegate reports the component.

Every probe returns ``False`` for absent or malformed identifiers and never
raises.
"""

from __future__ import annotations

import importlib.util
from typing import Callable, Iterable

from ...observability import log_debug


class ImportProbe:
    """Report components that resolve to an importable module.

    The top-level package is located first without importing it; an absent
    one answers ``False`` at once. Resolving a dotted name imports its parent
    packages, so any exception raised by their import code is reported as
    "not available".

    Examples
    --------
    >>> probe = ImportProbe()
    >>> probe("json"), probe("org.mariadb.jdbc.Driver"), probe("")
    (True, False, False)
    """

    def __call__(self, component: str) -> bool:
        if not component:
            return False
        try:
            if importlib.util.find_spec(component.partition(".")[0]) is None:
                return False
            return importlib.util.find_spec(component) is not None
        except Exception as exc:  # noqa: BLE001 - third-party package import code may raise anything
            log_debug("capability_probe_failed", layer="probe", binding=None, component=component, error=type(exc).__name__)
            return False


class StaticProbe:
    """Report exactly the configured component identifiers.

    Examples
    --------
    >>> probe = StaticProbe(["org.mariadb.jdbc.Driver"])
    >>> probe("org.mariadb.jdbc.Driver"), probe("com.mysql.cj.jdbc.Driver")
    (True, False)
    """

    def __init__(self, components: Iterable[str] = ()) -> None:
        self._components = frozenset(components)

    @property
    def components(self) -> frozenset[str]:
        return self._components

    def __call__(self, component: str) -> bool:
        return component in self._components


class ChainedProbe:
    """Combine probes; a component is available when any delegate says so."""

    def __init__(self, *probes: Callable[[str], bool]) -> None:
        self._probes = probes

    def __call__(self, component: str) -> bool:
        return any(probe(component) for probe in self._probes)
