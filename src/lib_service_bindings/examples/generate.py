"""Sample bindings tree generation.

Purpose
-------
Produce a reproducible bindings directory for demos, documentation, and local
experiments (``SERVICE_BINDING_ROOT=<destination>``). This module belongs to
the outer ring and has no runtime coupling to the dispatcher.

Contents
    - ``SAMPLE_BINDINGS``: sample entries per binding type.
    - ``ExampleSpec``: dataclass capturing a relative path and text content.
    - ``generate_examples``: writes the selected samples.
    - ``_build_specs``: yields one spec per entry file.
    - ``_write_examples`` / ``_should_write``: filesystem helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Mapping

SAMPLE_PROVIDER = "sample"
"""Provider entry written into every generated binding."""

SAMPLE_BINDINGS: Mapping[str, Mapping[str, str]] = {
    "mongodb": {
        "host": "mongodb.example.internal",
        "port": "27017",
        "database": "orders",
        "username": "orders",
        "password": "changeme",
    },
    "mysql": {
        "host": "mysql.example.internal",
        "port": "3306",
        "database": "inventory",
        "username": "inventory",
        "password": "changeme",
    },
    "redis": {
        "host": "redis.example.internal",
        "port": "6379",
        "password": "changeme",
    },
    "wavefront": {
        "uri": "https://wavefront.example.com",
        "api-token": "changeme",
    },
}


@dataclass(slots=True)
class ExampleSpec:
    """Describe a single example file to be written to disk."""

    relative_path: Path
    content: str


def generate_examples(
    destination: str | Path,
    *,
    types: Iterable[str] | None = None,
    force: bool = False,
) -> list[Path]:
    """Write one sample binding directory per requested type under *destination*.

    Parameters
    ----------
    destination:
        Directory that becomes the bindings root.
    types:
        Subset of :data:`SAMPLE_BINDINGS` to write; all of them when ``None``.
    force:
        Overwrite existing files instead of skipping them.

    Returns
    -------
    list[Path]
        Files written during this invocation.

    Raises
    ------
    ValueError
        When a requested type has no sample.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> written = generate_examples(tmp.name, types=["redis"])
    >>> sorted(path.name for path in written)
    ['host', 'password', 'port', 'provider', 'type']
    >>> tmp.cleanup()
    """

    selected = list(types) if types is not None else list(SAMPLE_BINDINGS)
    unknown = sorted(set(selected) - set(SAMPLE_BINDINGS))
    if unknown:
        raise ValueError(f"No sample binding for type(s): {', '.join(unknown)}")
    return _write_examples(Path(destination), _build_specs(selected), force)


def _build_specs(types: Iterable[str]) -> Iterator[ExampleSpec]:
    """Yield the ``type`` and ``provider`` files plus every sample entry.

    Examples
    --------
    >>> [spec.relative_path.as_posix() for spec in _build_specs(["wavefront"])][:2]
    ['wavefront-sample/type', 'wavefront-sample/provider']
    """

    for binding_type in types:
        directory = Path(f"{binding_type}-sample")
        yield ExampleSpec(directory / "type", f"{binding_type}\n")
        yield ExampleSpec(directory / "provider", f"{SAMPLE_PROVIDER}\n")
        for entry, value in SAMPLE_BINDINGS[binding_type].items():
            yield ExampleSpec(directory / entry, f"{value}\n")


def _write_examples(destination: Path, specs: Iterator[ExampleSpec], force: bool) -> list[Path]:
    written: list[Path] = []
    for spec in specs:
        path = destination / spec.relative_path
        if not _should_write(path, force):
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(spec.content, encoding="utf-8")
        written.append(path)
    return written


def _should_write(path: Path, force: bool) -> bool:
    return force or not path.exists()
