"""Application-layer merge policy for property layers.

Purpose
-------
Place the bindings-derived properties at a chosen precedence position between
other property layers (typically hard-coded defaults below, explicit user
configuration above) while tracking which layer won each key. The module is
free of I/O.

Contents
    - ``merge_layers``: public entry point driven by a simple loop.
    - ``flatten``: turns nested mappings into dotted keys.
    - ``_default_origin``: provenance for layers without their own metadata.

System Role
-----------
Used by :func:`lib_service_bindings.core.collect_properties` and the ``read``
CLI command. Precedence is the order of the ``layers`` argument.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Collection, Iterable

from ..domain.properties import SourceInfo

Layer = tuple[str, Mapping[str, Any], Mapping[str, SourceInfo] | None]


def merge_layers(
    layers: Iterable[Layer],
    *,
    verbatim: Collection[str] = (),
) -> tuple[dict[str, Any], dict[str, SourceInfo]]:
    """Merge property *layers* (lowest precedence first) into one flat mapping.

    Why
    ----
    The host decides where binding-derived values sit; the merge keeps that
    decision to one ordered list.

    Parameters
    ----------
    layers:
        ``(layer_name, mapping, provenance_or_None)`` tuples. Nested mappings
        are flattened to dotted keys before merging.
    verbatim:
        Names of layers whose mappings are already flat. Their values are
        merged as they are, so a structured value (for example a mapping
        produced by a combiner) stays one property.

    Returns
    -------
    tuple[dict[str, Any], dict[str, SourceInfo]]
        ``(merged, provenance)``; the last layer writing a key wins.

    Examples
    --------
    >>> merged, meta = merge_layers([
    ...     ("defaults", {"spring": {"redis": {"host": "localhost", "port": "6379"}}}, None),
    ...     ("bindings", {"spring.redis.host": "cache"}, None),
    ... ])
    >>> merged["spring.redis.host"], merged["spring.redis.port"], meta["spring.redis.host"]["layer"]
    ('cache', '6379', 'bindings')
    """

    merged: dict[str, Any] = {}
    meta: dict[str, SourceInfo] = {}
    for layer_name, data, origins in layers:
        entries = dict(data) if layer_name in verbatim else flatten(data)
        for key, value in entries.items():
            merged[key] = value
            supplied = origins.get(key) if origins else None
            meta[key] = SourceInfo(**supplied) if supplied else _default_origin(layer_name, key)
    return merged, meta


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Return *data* with nested mappings collapsed into dotted keys.

    Empty nested mappings contribute nothing.

    Examples
    --------
    >>> flatten({"spring": {"ldap": {"base": "dc=x"}}, "plain.key": 1})
    {'spring.ldap.base': 'dc=x', 'plain.key': 1}
    """

    flat: dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, dotted))
        else:
            flat[dotted] = value
    return flat


def _default_origin(layer: str, key: str) -> SourceInfo:
    return SourceInfo(layer=layer, binding=None, path=None, key=key)
