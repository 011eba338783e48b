"""Unit tests for the structured logging helpers."""

from __future__ import annotations

import logging

import pytest

from lib_service_bindings import bind_trace_id, get_logger
from lib_service_bindings.observability import TRACE_ID, log_info, make_event


def test_null_handler_present() -> None:
    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="lib_service_bindings")
    bind_trace_id("trace-123")
    try:
        log_info("properties_collected", **make_event("core", None, {"keys": 2}))
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "layer": "core", "binding": None, "keys": 2}


def test_bind_trace_id_clears_context() -> None:
    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_without_payload() -> None:
    assert make_event("loader", "cache") == {"layer": "loader", "binding": "cache"}
