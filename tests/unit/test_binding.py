"""Binding and Bindings value object behaviour.

Covers the reserved entries, immutability, and the order-preserving type
filter every processor relies on.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_service_bindings.domain.binding import PROVIDER, TYPE, Binding, Bindings


def test_reserved_entries_exposed_as_properties() -> None:
    binding = Binding("orders", Path("/b/orders"), {TYPE: "mysql", PROVIDER: "bitnami", "host": "db"})
    assert binding.type == "mysql"
    assert binding.provider == "bitnami"
    assert binding.get("host") == "db"
    assert binding.get("port") is None


def test_missing_type_reports_none() -> None:
    binding = Binding("loose", Path("loose"), {"host": "db"})
    assert binding.type is None
    assert binding.provider is None


def test_binding_is_immutable() -> None:
    source = {TYPE: "redis"}
    binding = Binding("cache", Path("cache"), source)
    source["host"] = "added-later"
    assert "host" not in binding.entries
    with pytest.raises(TypeError):
        binding.entries["host"] = "x"  # type: ignore[index]
    with pytest.raises(FrozenInstanceError):
        binding.name = "other"  # type: ignore[misc]


def test_filter_preserves_discovery_order() -> None:
    bindings = Bindings(
        [
            Binding("a", Path("a"), {TYPE: "redis"}),
            Binding("b", Path("b"), {TYPE: "mongodb"}),
            Binding("c", Path("c"), {TYPE: "redis"}),
            Binding("d", Path("d"), {}),
        ]
    )
    assert [binding.name for binding in bindings.filter_bindings("redis")] == ["a", "c"]
    assert bindings.filter_bindings("kafka") == []


def test_filter_is_case_sensitive() -> None:
    bindings = Bindings([Binding("a", Path("a"), {TYPE: "Redis"})])
    assert bindings.filter_bindings("redis") == []
    assert len(bindings.filter_bindings("Redis")) == 1


def test_bindings_sequence_protocol() -> None:
    items = [Binding(name, Path(name), {TYPE: "ldap"}) for name in ("x", "y")]
    bindings = Bindings(items)
    assert len(bindings) == 2
    assert bindings[0].name == "x"
    assert [binding.name for binding in bindings] == ["x", "y"]
    assert bindings == Bindings(items)


TYPES = st.sampled_from(["redis", "mongodb", "mysql", None])


@given(st.lists(TYPES, max_size=8), st.sampled_from(["redis", "mongodb", "mysql", "kafka"]))
def test_filter_returns_exact_ordered_subset(types, wanted) -> None:
    bindings = Bindings(
        Binding(f"b{index}", Path(f"b{index}"), {} if type_ is None else {TYPE: type_})
        for index, type_ in enumerate(types)
    )
    expected = [f"b{index}" for index, type_ in enumerate(types) if type_ == wanted]
    assert [binding.name for binding in bindings.filter_bindings(wanted)] == expected
