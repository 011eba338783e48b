from __future__ import annotations

from lib_service_bindings.adapters.env.default import DefaultEnvironmentSource
from lib_service_bindings.adapters.filesystem.default import DirectoryBindingsLoader
from lib_service_bindings.adapters.probes.default import ChainedProbe, ImportProbe, StaticProbe
from lib_service_bindings.application.ports import (
    BindingsLoader,
    BindingsProcessor,
    CapabilityProbe,
    EnvironmentSource,
)
from lib_service_bindings.processors import DEFAULT_PROCESSORS


def test_environment_source_contract() -> None:
    assert isinstance(DefaultEnvironmentSource(environ={}), EnvironmentSource)


def test_bindings_loader_contract() -> None:
    assert isinstance(DirectoryBindingsLoader(), BindingsLoader)


def test_capability_probe_contract() -> None:
    for probe in (ImportProbe(), StaticProbe(), ChainedProbe()):
        assert isinstance(probe, CapabilityProbe)


def test_processor_contract() -> None:
    for processor in DEFAULT_PROCESSORS:
        assert isinstance(processor, BindingsProcessor)
