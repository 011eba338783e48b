"""Public package surface for ``lib_service_bindings``.

Discover service bindings mounted on disk and project their entries into
configuration properties::

    from lib_service_bindings import collect_properties

    properties = collect_properties()          # roots from $SERVICE_BINDING_ROOT
    properties.get("spring.datasource.url")
    properties.origin("spring.datasource.url")  # which binding won

Lower-level building blocks (loader, dispatcher, processor records, rules)
are re-exported for hosts that register their own service types.
"""

from __future__ import annotations

from .application.dispatch import Dispatcher
from .application.guards import ENABLE_PREFIX, HostVersionResolver, is_globally_enabled, is_type_enabled
from .application.mapper import MapMapper
from .application.merge import merge_layers
from .application.processor import MappingProcessor, ProcessContext
from .application.rules import Compose, DatabaseUrl, DriverClass, ProtocolChoice, Rename, renames
from .adapters.env.default import DefaultEnvironmentSource
from .adapters.filesystem.default import DirectoryBindingsLoader, default_binding_roots
from .adapters.probes.default import ChainedProbe, ImportProbe, StaticProbe
from .core import collect_properties, load_bindings, process_bindings
from .domain.binding import PROVIDER, TYPE, Binding, Bindings
from .domain.errors import BindingsError, InvalidFormat, LoadError, MappingError, NotFound, ProcessingError
from .domain.properties import EMPTY_PROPERTIES, Properties, SourceInfo
from .observability import bind_trace_id, get_logger
from .processors import default_processors

__all__ = [
    "Binding",
    "Bindings",
    "BindingsError",
    "ChainedProbe",
    "Compose",
    "DatabaseUrl",
    "DefaultEnvironmentSource",
    "DirectoryBindingsLoader",
    "Dispatcher",
    "DriverClass",
    "EMPTY_PROPERTIES",
    "ENABLE_PREFIX",
    "HostVersionResolver",
    "ImportProbe",
    "InvalidFormat",
    "LoadError",
    "MapMapper",
    "MappingError",
    "MappingProcessor",
    "NotFound",
    "PROVIDER",
    "ProcessContext",
    "ProcessingError",
    "Properties",
    "ProtocolChoice",
    "Rename",
    "SourceInfo",
    "StaticProbe",
    "TYPE",
    "bind_trace_id",
    "collect_properties",
    "default_binding_roots",
    "default_processors",
    "get_logger",
    "is_globally_enabled",
    "is_type_enabled",
    "load_bindings",
    "merge_layers",
    "process_bindings",
    "renames",
]
