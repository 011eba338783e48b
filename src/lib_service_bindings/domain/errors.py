"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the dispatcher, and
consuming applications. The hierarchy lives in the domain layer so outer
layers can raise it without the domain depending on them.

Contents
--------
* :class:`BindingsError` – umbrella base class for all library failures.
* :class:`LoadError` – a binding path exists but cannot be read.
* :class:`MappingError` – mapper usage faults (programmer errors).
* :class:`ProcessingError` – unexpected processor failure during dispatch.
* :class:`InvalidFormat` / :class:`NotFound` – structured layer files used by
  the CLI.

System Role
-----------
Absent data (missing roots, entries, or matching bindings) is never an error.
Only "present but broken" inputs and contract violations surface here, and
callers catch :class:`BindingsError` to handle all of them uniformly.
"""

from __future__ import annotations


class BindingsError(Exception):
    """Base type for all exceptions emitted by ``lib_service_bindings``."""


class LoadError(BindingsError):
    """Raised when an existing binding root, directory, or entry cannot be read.

    Why
    ----
    A broken secret is worse than a missing one: the loader distinguishes
    "absent" (silently skipped) from "present but unreadable" (fatal).
    """


class MappingError(BindingsError):
    """Signals a :class:`~lib_service_bindings.application.mapper.MapMapper` usage fault.

    Raised for contract violations such as selecting zero source keys. Missing
    source entries are *not* mapping errors; they are silently skipped.
    """


class ProcessingError(BindingsError):
    """Wraps an unexpected exception raised by a processor during dispatch.

    The dispatcher is fail-fast: the first failure aborts the pass, and this
    error names the processor that failed while chaining the original cause.
    """


class InvalidFormat(BindingsError):
    """Raised when a defaults/overrides layer file cannot be parsed into a mapping."""


class NotFound(BindingsError):
    """Represents a missing layer file; callers decide whether that is fatal."""
