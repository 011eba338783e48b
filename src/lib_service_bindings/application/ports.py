"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the dispatcher and processors depend on so
the filesystem, the environment, and runtime capability checks stay
replaceable (and trivially fakeable in tests).

Contents
--------
* :class:`EnvironmentSource` – ``get(key)`` lookup used by enable guards.
* :class:`CapabilityProbe` – "is optional component X available" check.
* :class:`BindingsLoader` – materialises :class:`Bindings` from roots.
* :class:`BindingsProcessor` – maps bindings of one type into a destination.

System Role
-----------
These protocols enforce dependency inversion: adapters implement them, the
composition root wires concrete instances, and the application layer only
sees the abstractions.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

from ..domain.binding import Bindings

if TYPE_CHECKING:
    from .processor import ProcessContext


@runtime_checkable
class EnvironmentSource(Protocol):
    """Read-only key lookup consulted by the guards.

    Why
    ----
    Guards only need "is this flag set, and to what"; the concrete source may
    be the process environment, a host configuration object, or a dict.
    """

    def get(self, key: str) -> str | None:
        """Return the value for *key* or ``None`` when absent."""


@runtime_checkable
class CapabilityProbe(Protocol):
    """Report whether an optional runtime component is available.

    Implementations must be pure and must never raise: an absent component is
    a normal ``False``.
    """

    def __call__(self, component: str) -> bool:
        """Return ``True`` when *component* is available to the running process."""


@runtime_checkable
class BindingsLoader(Protocol):
    """Build a :class:`Bindings` collection from one or more root directories."""

    def load(self, roots: Iterable[str | Path]) -> Bindings:
        """Return every binding under *roots*, skipping roots that do not exist."""


@runtime_checkable
class BindingsProcessor(Protocol):
    """Project the bindings of one service type into destination properties."""

    type: str

    def process(
        self,
        environment: EnvironmentSource,
        bindings: Bindings,
        destination: MutableMapping[str, object],
        context: ProcessContext | None = None,
    ) -> None:
        """Apply guards and mapping rules; mutate *destination* only."""
