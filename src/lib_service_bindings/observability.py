"""Structured logging helpers shared by the loader, processors, and dispatcher.

Purpose
    Keep every log emission predictable and correlated without forcing
    applications to adopt a specific logging backend. Entry *values* are
    secrets and are never passed to these helpers; only names and counts are.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the package logger (quiet by default).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured entries via
      a single private emitter.
    - ``make_event``: builder for ``layer``/``binding`` event payloads.

System Integration
    Adapters and application services log through these helpers so every
    record carries ``extra={"context": {...}}`` with the trace identifier.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_service_bindings_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_service_bindings")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('startup-1')
    >>> TRACE_ID.get()
    'startup-1'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(layer: str, binding: str | None, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build a structured payload for loader and dispatch events.

    Inputs
        layer: Component or processor label emitting the event.
        binding: Binding name the event concerns, if any.
        payload: Optional extra diagnostic detail (never entry values).

    Examples
    --------
    >>> make_event('mongodb', 'orders', {'keys': 3})
    {'layer': 'mongodb', 'binding': 'orders', 'keys': 3}
    """

    event: dict[str, Any] = {"layer": layer, "binding": binding}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context
