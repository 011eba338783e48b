"""Structured defaults/overrides file loaders."""

from __future__ import annotations

from pathlib import Path

import pytest

from lib_service_bindings.adapters.file_loaders.structured import (
    JSONFileLoader,
    TOMLFileLoader,
    YAMLFileLoader,
    load_layer_file,
)
from lib_service_bindings.domain.errors import InvalidFormat, NotFound


def _write(tmp_path: Path, name: str, body: str) -> Path:
    path = tmp_path / name
    path.write_text(body, encoding="utf-8")
    return path


def test_toml_nested_tables(tmp_path: Path) -> None:
    path = _write(tmp_path, "defaults.toml", '[spring.redis]\nhost = "localhost"\nport = 6379\n')
    assert TOMLFileLoader().load(path) == {"spring": {"redis": {"host": "localhost", "port": 6379}}}


def test_json_flat_keys(tmp_path: Path) -> None:
    path = _write(tmp_path, "overrides.json", '{"spring.redis.host": "override"}')
    assert JSONFileLoader().load(path) == {"spring.redis.host": "override"}


def test_yaml_and_empty_yaml(tmp_path: Path) -> None:
    path = _write(tmp_path, "defaults.yaml", "spring:\n  ldap:\n    base: dc=example\n")
    assert YAMLFileLoader().load(path) == {"spring": {"ldap": {"base": "dc=example"}}}
    assert YAMLFileLoader().load(_write(tmp_path, "empty.yml", "")) == {}


@pytest.mark.parametrize(
    ("name", "body"),
    [("bad.toml", "[unclosed"), ("bad.json", "{not json"), ("bad.yaml", "a: [1, 2")],
)
def test_invalid_content(tmp_path: Path, name: str, body: str) -> None:
    with pytest.raises(InvalidFormat):
        load_layer_file(_write(tmp_path, name, body))


def test_non_mapping_document(tmp_path: Path) -> None:
    with pytest.raises(InvalidFormat):
        load_layer_file(_write(tmp_path, "list.json", "[1, 2]"))


def test_unsupported_suffix(tmp_path: Path) -> None:
    with pytest.raises(InvalidFormat):
        load_layer_file(_write(tmp_path, "defaults.ini", "[a]\nb=c\n"))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        load_layer_file(tmp_path / "absent.toml")


def test_suffix_is_case_insensitive(tmp_path: Path) -> None:
    path = _write(tmp_path, "DEFAULTS.JSON", '{"a": "b"}')
    assert load_layer_file(path) == {"a": "b"}
