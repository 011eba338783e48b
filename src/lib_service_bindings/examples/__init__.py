"""Example scaffolding utilities for ``lib_service_bindings``."""

from .generate import SAMPLE_BINDINGS, ExampleSpec, generate_examples

__all__ = [
    "ExampleSpec",
    "SAMPLE_BINDINGS",
    "generate_examples",
]
