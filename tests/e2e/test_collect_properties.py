"""End-to-end coverage of the composition root against on-disk bindings.

The sandbox writes the same directory layout a platform mounts into a
container, so these tests double as usage documentation for
``collect_properties``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from lib_service_bindings import (
    EMPTY_PROPERTIES,
    ENABLE_PREFIX,
    Compose,
    LoadError,
    MappingProcessor,
    ProcessingError,
    Rename,
    StaticProbe,
    collect_properties,
    load_bindings,
)
from tests.support import create_bindings_sandbox

MONGODB = {
    "host": "mongo.internal",
    "port": "27017",
    "database": "orders",
    "username": "app",
    "password": "secret",
}


def test_roots_from_service_binding_root(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("orders", "mongodb", MONGODB, provider="bitnami")
    props = collect_properties(environ=sandbox.env)
    assert props["spring.data.mongodb.host"] == "mongo.internal"
    assert props["spring.data.mongodb.database"] == "orders"
    origin = props.origin("spring.data.mongodb.host")
    assert origin is not None
    assert origin["layer"] == "mongodb"
    assert origin["binding"] == "orders"
    assert origin["path"] == str(sandbox.root / "orders")


def test_process_environment_is_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("metrics", "wavefront", {"uri": "https://wf"})
    monkeypatch.setenv("SERVICE_BINDING_ROOT", str(sandbox.root))
    assert collect_properties().as_dict() == {"management.wavefront.uri": "https://wf"}


def test_no_roots_returns_empty_properties() -> None:
    assert collect_properties(environ={}) is EMPTY_PROPERTIES


def test_disable_flag_through_environ(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("orders", "mongodb", MONGODB)
    sandbox.write_binding("metrics", "wavefront", {"uri": "https://wf"})
    environ = {**sandbox.env, "ORG_SPRINGFRAMEWORK_CLOUD_BINDINGS_BOOT_MONGODB_ENABLE": "false"}
    props = collect_properties(environ=environ)
    assert props.as_dict() == {"management.wavefront.uri": "https://wf"}


def test_global_disable(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("orders", "mongodb", MONGODB)
    environ = {**sandbox.env, f"{ENABLE_PREFIX}.enable": "false"}
    assert len(collect_properties(environ=environ)) == 0


def test_multiple_roots_later_binding_wins(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    overlay = tmp_path / "overlay"
    sandbox.write_binding("cache", "redis", {"host": "base", "port": "6379"})
    sandbox.write_binding("cache", "redis", {"host": "overlay"}, root=overlay)
    environ = {"SERVICE_BINDING_ROOT": os.pathsep.join([str(sandbox.root), str(overlay)])}
    props = collect_properties(environ=environ)
    assert props["spring.redis.host"] == "overlay"
    assert props["spring.redis.port"] == "6379"
    assert props.origin("spring.redis.host")["path"] == str(overlay / "cache")


def test_defaults_and_overrides_layering(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("cache", "redis", {"host": "bound"})
    props = collect_properties(
        roots=[sandbox.root],
        environ={},
        defaults={"spring": {"redis": {"host": "localhost", "port": "6379"}}},
        overrides={"spring.redis.port": "6380"},
    )
    assert props.as_dict() == {"spring.redis.host": "bound", "spring.redis.port": "6380"}
    assert props.origin("spring.redis.host")["binding"] == "cache"
    assert props.origin("spring.redis.port")["layer"] == "overrides"


def test_capability_probe_selects_driver(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("inventory", "mysql", {"host": "h", "port": "3306", "database": "d"})
    props = collect_properties(
        roots=[sandbox.root],
        environ={},
        probe=StaticProbe(["org.mariadb.r2dbc.MariadbConnection", "org.mariadb.jdbc.Driver"]),
    )
    assert props["spring.datasource.url"] == "jdbc:mariadb://h:3306/d"
    assert props["spring.datasource.driver-class-name"] == "org.mariadb.jdbc.Driver"


def test_host_version_selects_processor_variant(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("search", "elasticsearch", {"endpoints": "http://es:9200"})
    assert collect_properties(roots=[sandbox.root], environ={}, host_version=3).as_dict() == {
        "spring.elasticsearch.uris": "http://es:9200"
    }
    assert collect_properties(roots=[sandbox.root], environ={}, host_version=2).as_dict() == {
        "spring.elasticsearch.rest.uris": "http://es:9200"
    }


def test_custom_registry(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("queue", "acme-queue", {"endpoint": "amqp://q"})
    processors = [MappingProcessor("acme-queue", (Rename("endpoint", "acme.queue.endpoint"),))]
    props = collect_properties(roots=[sandbox.root], environ={}, processors=processors)
    assert props.as_dict() == {"acme.queue.endpoint": "amqp://q"}


def test_failing_combiner_surfaces_processing_error(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("svc", "acme", {"port": "not-a-number", "host": "h"})
    processors = [MappingProcessor("acme", (Compose(("host", "port"), "acme.port", lambda host, port: int(port)),))]
    with pytest.raises(ProcessingError) as excinfo:
        collect_properties(roots=[sandbox.root], environ={}, processors=processors)
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_unreadable_entry_surfaces_load_error(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    directory = sandbox.write_binding("cache", "redis")
    (directory / "password").write_bytes(b"\xff\xfe")
    with pytest.raises(LoadError):
        collect_properties(environ=sandbox.env)


def test_load_bindings_lists_untyped(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("loose", None, {"note": "x"})
    sandbox.write_binding("cache", "redis")
    bindings = load_bindings(environ=sandbox.env)
    assert [binding.name for binding in bindings] == ["cache", "loose"]
    assert len(collect_properties(environ=sandbox.env)) == 0


def test_logs_counts_without_values(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_service_bindings")
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("orders", "mongodb", MONGODB)
    collect_properties(environ=sandbox.env)
    collected = [record for record in caplog.records if record.getMessage() == "properties_collected"]
    assert getattr(collected[-1], "context")["keys"] == 5
    assert all("secret" not in repr(getattr(record, "context", {})) for record in caplog.records)


def test_structured_combiner_value_survives_layering(tmp_path: Path) -> None:
    sandbox = create_bindings_sandbox(tmp_path)
    sandbox.write_binding("svc", "acme", {"host": "h", "port": "1"})
    processors = [
        MappingProcessor("acme", (Compose(("host", "port"), "acme.address", lambda host, port: {"host": host, "port": port}),))
    ]
    plain = collect_properties(roots=[sandbox.root], environ={}, processors=processors)
    layered = collect_properties(
        roots=[sandbox.root],
        environ={},
        processors=processors,
        defaults={"acme": {"timeout": "5s"}},
    )
    assert plain["acme.address"] == {"host": "h", "port": "1"}
    assert layered["acme.address"] == {"host": "h", "port": "1"}
    assert "acme.address.host" not in layered
    assert layered["acme.timeout"] == "5s"
    assert layered.origin("acme.address")["binding"] == "svc"
