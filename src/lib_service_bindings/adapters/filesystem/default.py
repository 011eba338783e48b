"""Filesystem bindings adapter.

Purpose
-------
Implement the :class:`lib_service_bindings.application.ports.BindingsLoader`
protocol for the directory convention used by service binding mounts::

    <root>/<binding-name>/type
    <root>/<binding-name>/provider
    <root>/<binding-name>/<entry>

Key behaviours
--------------
* Roots that do not exist are skipped; "no bindings configured" is the normal
  case, not an error.
* Binding directories and entry files are enumerated in lexicographic order;
  names starting with ``.`` (Kubernetes ``..data`` links and timestamped
  directories) are ignored. Symlinks are followed.
* Entry values are read as UTF-8 with trailing line terminators removed.
* Paths that exist but cannot be read raise :class:`LoadError`.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, Mapping

from ...domain.binding import Binding, Bindings
from ...domain.errors import LoadError
from ...observability import log_debug, make_event

SERVICE_BINDING_ROOT = "SERVICE_BINDING_ROOT"
"""Environment variable listing binding roots (``os.pathsep`` separated)."""


def default_binding_roots(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return the roots named by ``SERVICE_BINDING_ROOT``.

    Examples
    --------
    >>> import os
    >>> default_binding_roots({"SERVICE_BINDING_ROOT": os.pathsep.join(["/a", "", "/b"])})
    [PosixPath('/a'), PosixPath('/b')]
    >>> default_binding_roots({})
    []
    """

    source = os.environ if environ is None else environ
    raw = source.get(SERVICE_BINDING_ROOT, "")
    return [Path(part) for part in raw.split(os.pathsep) if part.strip()]


class DirectoryBindingsLoader:
    """Load bindings from one directory per bound service."""

    def load(self, roots: Iterable[str | Path]) -> Bindings:
        """Return the bindings found under *roots*, in root order then name order.

        Why
        ----
        Discovery order is part of the precedence contract (two bindings of
        the same type: the later one wins), so it has to be deterministic.

        Raises
        ------
        LoadError
            When an existing root, binding directory, or entry file cannot be
            read.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> binding_dir = Path(tmp.name) / "cache"
        >>> binding_dir.mkdir()
        >>> _ = (binding_dir / "type").write_text("redis\\n", encoding="utf-8")
        >>> _ = (binding_dir / "host").write_text("redis.local", encoding="utf-8")
        >>> loaded = DirectoryBindingsLoader().load([tmp.name, Path(tmp.name) / "missing"])
        >>> [(b.name, b.type, b.get("host")) for b in loaded]
        [('cache', 'redis', 'redis.local')]
        >>> tmp.cleanup()
        """

        collected: list[Binding] = []
        for root in roots:
            collected.extend(self._load_root(Path(root)))
        log_debug("bindings_loaded", **make_event("loader", None, {"count": len(collected)}))
        return Bindings(collected)

    def _load_root(self, root: Path) -> Iterator[Binding]:
        if not _is_root_directory(root):
            log_debug("bindings_root_missing", **make_event("loader", None, {"path": str(root)}))
            return
        for directory in _visible_children(root, directories=True):
            yield self._load_binding(directory)

    def _load_binding(self, directory: Path) -> Binding:
        entries: dict[str, str] = {}
        for path in _visible_children(directory, directories=False):
            entries[path.name] = _read_entry(path)
        binding = Binding(directory.name, directory, entries)
        event = make_event("loader", binding.name, {"path": str(directory), "entries": len(entries)})
        if binding.type is None:
            log_debug("binding_untyped", **event)
        else:
            log_debug("binding_loaded", type=binding.type, **event)
        return binding


def _is_root_directory(root: Path) -> bool:
    """Return whether *root* is a directory; only a missing path counts as absent."""

    try:
        return stat.S_ISDIR(root.stat().st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        raise LoadError(f"Cannot inspect binding root {root}: {exc}") from exc


def _visible_children(directory: Path, *, directories: bool) -> list[Path]:
    """Return the non-hidden sub-directories (or files) of *directory* sorted by name.

    Type checks follow symlinks and run inside the same guard as the listing,
    so a child that cannot be inspected raises :class:`LoadError`.
    """

    try:
        with os.scandir(directory) as entries:
            children = [
                Path(entry.path)
                for entry in entries
                if not entry.name.startswith(".") and (entry.is_dir() if directories else entry.is_file())
            ]
    except OSError as exc:
        raise LoadError(f"Cannot list binding directory {directory}: {exc}") from exc
    return sorted(children, key=lambda child: child.name)


def _read_entry(path: Path) -> str:
    """Read one entry value, stripping trailing line terminators only."""

    try:
        content = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read binding entry {path}: {exc}") from exc
    return content.rstrip("\r\n")
