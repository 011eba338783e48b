"""Composition root for ``lib_service_bindings``.

Purpose
-------
Wire the filesystem loader, environment source, capability probe, version
resolver, and processor registry into three entry points of increasing
convenience.

Contents
--------
* :func:`load_bindings` – discover bindings under the configured roots.
* :func:`process_bindings` – run the dispatcher and return the destination.
* :func:`collect_properties` – load + process (+ optional layering) and
  return an immutable :class:`Properties` with provenance.

System Role
-----------
This is the only module that knows the concrete adapters. It is the place to
change defaults (probe, registry) or to add a new adapter.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

from .adapters.env.default import DefaultEnvironmentSource
from .adapters.filesystem.default import DirectoryBindingsLoader, default_binding_roots
from .adapters.probes.default import ImportProbe
from .application.dispatch import Dispatcher
from .application.guards import HostVersionResolver
from .application.merge import Layer, merge_layers
from .application.ports import BindingsProcessor, EnvironmentSource
from .application.processor import ProcessContext
from .domain.binding import Bindings
from .domain.properties import EMPTY_PROPERTIES, Properties, SourceInfo
from .observability import bind_trace_id, log_info, make_event
from .processors import default_processors


def load_bindings(roots: Iterable[str | Path] | None = None, *, environ: Mapping[str, str] | None = None) -> Bindings:
    """Return the bindings under *roots* (default: ``SERVICE_BINDING_ROOT``).

    Examples
    --------
    >>> load_bindings(environ={})
    Bindings([])
    """

    resolved = list(roots) if roots is not None else default_binding_roots(environ)
    return DirectoryBindingsLoader().load(resolved)


def process_bindings(
    bindings: Bindings,
    *,
    environment: EnvironmentSource | None = None,
    probe: Callable[[str], bool] | None = None,
    host_version: int | None = None,
    host_distribution: str | None = None,
    processors: Sequence[BindingsProcessor] | None = None,
    destination: MutableMapping[str, object] | None = None,
    provenance: MutableMapping[str, SourceInfo] | None = None,
) -> MutableMapping[str, object]:
    """Dispatch *bindings* through the processor registry and return the destination.

    Parameters
    ----------
    environment:
        Flag source for the guards; defaults to the process environment.
    probe:
        Capability probe; defaults to :class:`ImportProbe`.
    host_version / host_distribution:
        Forced host major version, or the distribution whose installed
        version is the host version. Without either, version-scoped
        processors skip.
    processors:
        Ordered registry; defaults to :func:`default_processors`.
    destination:
        Mapping to write into; a fresh ``dict`` when omitted.
    provenance:
        Optional sink receiving one :class:`SourceInfo` per written key.

    Examples
    --------
    >>> from lib_service_bindings.domain.binding import Binding
    >>> bindings = Bindings([Binding("metrics", Path("metrics"), {"type": "wavefront", "uri": "https://wf"})])
    >>> process_bindings(bindings, environment=DefaultEnvironmentSource(environ={}))
    {'management.wavefront.uri': 'https://wf'}
    """

    context = ProcessContext(
        probe=probe or ImportProbe(),
        versions=HostVersionResolver(forced_major=host_version, distribution=host_distribution),
        provenance=provenance,
    )
    dispatcher = Dispatcher(processors if processors is not None else default_processors(), context=context)
    target: MutableMapping[str, object] = {} if destination is None else destination
    dispatcher.process_all(environment or DefaultEnvironmentSource(), bindings, target)
    return target


def collect_properties(
    *,
    roots: Iterable[str | Path] | None = None,
    environ: Mapping[str, str] | None = None,
    environment: EnvironmentSource | None = None,
    probe: Callable[[str], bool] | None = None,
    host_version: int | None = None,
    host_distribution: str | None = None,
    processors: Sequence[BindingsProcessor] | None = None,
    defaults: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Properties:
    """Load, process, and optionally layer bindings into :class:`Properties`.

    Why
    ----
    Hosts typically want one call at startup that returns the property
    source to install, together with an explanation of where each value came
    from.

    What
    ----
    Loads bindings (roots default to ``SERVICE_BINDING_ROOT`` read from
    *environ*), dispatches them, and, when *defaults* or *overrides* are
    given, merges ``defaults < bindings < overrides``.

    Side Effects
    ------------
    Clears the active trace identifier and emits a ``properties_collected``
    info event with counts only.

    Examples
    --------
    >>> props = collect_properties(environ={}, defaults={"spring.redis.port": "6379"})
    >>> props["spring.redis.port"], props.origin("spring.redis.port")["layer"]
    ('6379', 'defaults')
    """

    bind_trace_id(None)
    bindings = load_bindings(roots, environ=environ)
    provenance: dict[str, SourceInfo] = {}
    destination = process_bindings(
        bindings,
        environment=environment or DefaultEnvironmentSource(environ=environ),
        probe=probe,
        host_version=host_version,
        host_distribution=host_distribution,
        processors=processors,
        provenance=provenance,
    )

    if defaults or overrides:
        layers: list[Layer] = []
        if defaults:
            layers.append(("defaults", defaults, None))
        layers.append(("bindings", destination, provenance))
        if overrides:
            layers.append(("overrides", overrides, None))
        data, meta = merge_layers(layers, verbatim=("bindings",))
    else:
        data, meta = dict(destination), provenance

    log_info("properties_collected", **make_event("core", None, {"bindings": len(bindings), "keys": len(data)}))
    if not data:
        return EMPTY_PROPERTIES
    return Properties(data, meta)


__all__ = ["load_bindings", "process_bindings", "collect_properties"]
