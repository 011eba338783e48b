"""Execute the docstring examples so they stay accurate."""

from __future__ import annotations

import doctest
import importlib

import pytest

MODULES = [
    "lib_service_bindings.adapters.env.default",
    "lib_service_bindings.adapters.file_loaders.structured",
    "lib_service_bindings.adapters.filesystem.default",
    "lib_service_bindings.adapters.probes.default",
    "lib_service_bindings.application.dispatch",
    "lib_service_bindings.application.guards",
    "lib_service_bindings.application.mapper",
    "lib_service_bindings.application.merge",
    "lib_service_bindings.application.processor",
    "lib_service_bindings.application.rules",
    "lib_service_bindings.core",
    "lib_service_bindings.domain.binding",
    "lib_service_bindings.domain.properties",
    "lib_service_bindings.examples.generate",
    "lib_service_bindings.observability",
]


@pytest.mark.parametrize("name", MODULES)
def test_module_doctests(name: str) -> None:
    module = importlib.import_module(name)
    result = doctest.testmod(module, optionflags=doctest.ELLIPSIS | doctest.NORMALIZE_WHITESPACE)
    assert result.failed == 0
