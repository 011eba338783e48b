"""Shared fixtures for building binding trees on disk.

The sandbox mirrors the mount layout consumed by the filesystem loader so
tests read like the directory structure an operator would provision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from lib_service_bindings.adapters.env.default import DefaultEnvironmentSource
from lib_service_bindings.application.guards import ENABLE_PREFIX
from lib_service_bindings.domain.binding import Binding, Bindings


@dataclass(slots=True)
class BindingsSandbox:
    """A temporary bindings root plus helpers to populate it."""

    root: Path
    env: dict[str, str] = field(default_factory=dict)

    def write_binding(
        self,
        name: str,
        type: str | None,  # noqa: A002
        entries: Mapping[str, str] | None = None,
        *,
        provider: str | None = None,
        root: Path | None = None,
    ) -> Path:
        """Create ``<root>/<name>/`` with one file per entry and return the directory."""

        directory = (root or self.root) / name
        directory.mkdir(parents=True, exist_ok=True)
        if type is not None:
            (directory / "type").write_text(f"{type}\n", encoding="utf-8")
        if provider is not None:
            (directory / "provider").write_text(f"{provider}\n", encoding="utf-8")
        for key, value in (entries or {}).items():
            (directory / key).write_text(value, encoding="utf-8")
        return directory


def create_bindings_sandbox(tmp_path: Path) -> BindingsSandbox:
    """Return a sandbox whose ``env`` points ``SERVICE_BINDING_ROOT`` at a fresh root."""

    root = tmp_path / "bindings"
    root.mkdir(parents=True, exist_ok=True)
    return BindingsSandbox(root=root, env={"SERVICE_BINDING_ROOT": str(root)})


def make_bindings(*specs: tuple[str, Mapping[str, str]]) -> Bindings:
    """Build in-memory bindings from ``(name, entries)`` pairs."""

    return Bindings(Binding(name, Path("test-path") / name, entries) for name, entries in specs)


def environment(**flags: str) -> DefaultEnvironmentSource:
    """Return an isolated environment; ``redis="false"`` sets the redis enable flag."""

    return DefaultEnvironmentSource(environ={f"{ENABLE_PREFIX}.{type_}.enable": value for type_, value in flags.items()})
