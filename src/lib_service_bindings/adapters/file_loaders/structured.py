"""Structured property-layer file loaders.

Purpose
-------
Read the defaults and overrides layers that the ``read`` CLI command merges
around the bindings-derived properties. Files may be TOML, JSON, or YAML and
may be nested (``[spring.redis]``) or flat (``"spring.redis.host" = ...``);
:func:`lib_service_bindings.application.merge.flatten` normalises both.

Contents
--------
* :class:`BaseFileLoader` – shared read and mapping validation.
* :class:`TOMLFileLoader` / :class:`JSONFileLoader` / :class:`YAMLFileLoader`.
* :func:`load_layer_file` – picks a loader by file suffix.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Mapping

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format: str = "unknown"

    def load(self, path: str | Path) -> Mapping[str, object]:
        """Parse *path* into a mapping.

        Raises
        ------
        NotFound
            When *path* is not a file.
        InvalidFormat
            When the content cannot be parsed or is not a mapping.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Layer file not found: {file_path}")
        payload = file_path.read_bytes()
        try:
            data = self._parse(payload)
        except (ValueError, yaml.YAMLError) as exc:
            log_error("layer_file_invalid", layer="file", binding=None, path=str(file_path), format=self.format)
            raise InvalidFormat(f"Invalid {self.format.upper()} in {file_path}: {exc}") from exc
        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {file_path} did not produce a mapping")
        log_debug("layer_file_loaded", layer="file", binding=None, path=str(file_path), format=self.format)
        return data

    def _parse(self, payload: bytes) -> object:
        raise NotImplementedError


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using :mod:`tomllib`."""

    format = "toml"

    def _parse(self, payload: bytes) -> object:
        return tomllib.loads(payload.decode("utf-8"))


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "defaults.json"
    >>> _ = target.write_text('{"spring.redis.port": "6379"}', encoding="utf-8")
    >>> JSONFileLoader().load(target)["spring.redis.port"]
    '6379'
    >>> tmp.cleanup()
    """

    format = "json"

    def _parse(self, payload: bytes) -> object:
        return json.loads(payload)


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents with ``yaml.safe_load``; an empty document is an empty mapping."""

    format = "yaml"

    def _parse(self, payload: bytes) -> object:
        data = yaml.safe_load(payload)
        return {} if data is None else data


_LOADERS: dict[str, BaseFileLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def load_layer_file(path: str | Path) -> Mapping[str, object]:
    """Load *path* with the loader registered for its suffix.

    Raises
    ------
    InvalidFormat
        When the suffix is not one of ``.toml``, ``.json``, ``.yaml``, ``.yml``.
    """

    suffix = Path(path).suffix.lower()
    loader = _LOADERS.get(suffix)
    if loader is None:
        raise InvalidFormat(f"Unsupported layer file type {suffix or '<none>'}: {path}")
    return loader.load(path)
