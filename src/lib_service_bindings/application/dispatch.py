"""Ordered dispatch of every registered processor.

Purpose
    Run each processor exactly once, in registration order, against the same
    bindings and the same destination mapping. Registration order is the
    cross-type tie-break of the last-writer-wins rule.

Contents
    - ``Dispatcher``: holds the registry and the shared ``ProcessContext``.

System Integration
    Built by :mod:`lib_service_bindings.core` with the default registry from
    :mod:`lib_service_bindings.processors`; callers with custom service types
    pass their own ordered sequence.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Iterable

from ..domain.binding import Bindings
from ..domain.errors import ProcessingError
from ..observability import log_debug, log_error, make_event
from .guards import is_globally_enabled
from .ports import BindingsProcessor, EnvironmentSource
from .processor import ProcessContext


class Dispatcher:
    """Invoke an explicit, ordered registry of processors.

    Why
    ----
    Startup configuration must be all-or-nothing: a partially projected
    configuration is worse than none, so the first processor fault aborts the
    pass (fail-fast) instead of being skipped.

    Examples
    --------
    >>> from pathlib import Path
    >>> from lib_service_bindings.adapters.env.default import DefaultEnvironmentSource
    >>> from lib_service_bindings.application.processor import MappingProcessor
    >>> from lib_service_bindings.application.rules import Rename
    >>> from lib_service_bindings.domain.binding import Binding
    >>> dispatcher = Dispatcher([
    ...     MappingProcessor("a", (Rename("host", "shared.host"),)),
    ...     MappingProcessor("b", (Rename("host", "shared.host"),)),
    ... ])
    >>> bindings = Bindings([
    ...     Binding("second", Path("b"), {"type": "b", "host": "from-b"}),
    ...     Binding("first", Path("a"), {"type": "a", "host": "from-a"}),
    ... ])
    >>> destination = {}
    >>> dispatcher.process_all(DefaultEnvironmentSource(environ={}), bindings, destination)
    >>> destination["shared.host"]
    'from-b'
    """

    def __init__(self, processors: Iterable[BindingsProcessor], *, context: ProcessContext | None = None) -> None:
        self._processors: tuple[BindingsProcessor, ...] = tuple(processors)
        self._context = context or ProcessContext()

    @property
    def processors(self) -> tuple[BindingsProcessor, ...]:
        return self._processors

    def process_all(
        self,
        environment: EnvironmentSource,
        bindings: Bindings,
        destination: MutableMapping[str, object],
    ) -> None:
        """Run every processor in registration order.

        Raises
        ------
        ProcessingError
            When a processor raises; the original exception is chained and no
            further processors run.
        """

        if not is_globally_enabled(environment):
            log_debug("dispatch_disabled", **make_event("dispatch", None, {"processors": len(self._processors)}))
            return

        for processor in self._processors:
            label = getattr(processor, "label", processor.type)
            try:
                processor.process(environment, bindings, destination, self._context)
            except Exception as exc:
                log_error("dispatch_failed", **make_event(label, None, {"error": type(exc).__name__}))
                raise ProcessingError(f"Processor {label} failed: {exc}") from exc
