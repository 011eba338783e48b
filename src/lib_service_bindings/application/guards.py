"""Guards consulted before a processor touches the destination.

Purpose
-------
Decide whether processing runs at all (global flag), whether a given service
type is administratively enabled, and whether a host-version-specific
processor variant matches the running host framework.

Contents
--------
* :data:`ENABLE_PREFIX` – namespace of the enable flags.
* :func:`is_globally_enabled` / :func:`is_type_enabled` – flag checks,
  re-evaluated on every call.
* :class:`HostVersionResolver` – resolves the host major version once, from
  an override or from installed distribution metadata.

System Role
-----------
Used by :class:`lib_service_bindings.application.processor.MappingProcessor`
and :class:`lib_service_bindings.application.dispatch.Dispatcher`.
"""

from __future__ import annotations

import re
from importlib import metadata
from typing import Final

from ..observability import log_debug
from .ports import EnvironmentSource

ENABLE_PREFIX: Final[str] = "org.springframework.cloud.bindings.boot"

_FALSE_LITERALS: Final[frozenset[str]] = frozenset({"false"})
_MAJOR_PATTERN = re.compile(r"^\s*v?(\d+)")


def is_globally_enabled(environment: EnvironmentSource, *, prefix: str = ENABLE_PREFIX) -> bool:
    """Return ``False`` only when ``<prefix>.enable`` is a false literal.

    Examples
    --------
    >>> from lib_service_bindings.adapters.env.default import DefaultEnvironmentSource
    >>> is_globally_enabled(DefaultEnvironmentSource(environ={}))
    True
    """

    return _flag_enabled(environment, f"{prefix}.enable")


def is_type_enabled(environment: EnvironmentSource, type: str, *, prefix: str = ENABLE_PREFIX) -> bool:  # noqa: A002
    """Return whether processors for *type* may run.

    Why
    ----
    Operators need to switch off one projection (for example because the
    application configures that service by hand) without removing the
    binding.

    What
    ----
    Looks up ``<prefix>.<type>.enable``. Absent or any value other than a
    case-insensitive ``false`` means enabled.

    Examples
    --------
    >>> from lib_service_bindings.adapters.env.default import DefaultEnvironmentSource
    >>> env = DefaultEnvironmentSource(environ={f"{ENABLE_PREFIX}.redis.enable": "FALSE"})
    >>> is_type_enabled(env, "redis"), is_type_enabled(env, "mongodb")
    (False, True)
    """

    return _flag_enabled(environment, f"{prefix}.{type}.enable")


def _flag_enabled(environment: EnvironmentSource, key: str) -> bool:
    value = environment.get(key)
    if value is None:
        return True
    return value.strip().lower() not in _FALSE_LITERALS


class HostVersionResolver:
    """Determine the major version of the host framework.

    Why
    ----
    Some service types map to different destination keys depending on the
    host framework's major version. The resolver answers "does the running
    host match major version N" so exactly one processor variant applies.

    What
    ----
    Resolution order: ``forced_major`` (tests, explicit configuration), then
    the installed version of ``distribution`` read through
    :mod:`importlib.metadata`. The answer is computed once and cached. When
    neither yields a version the resolver matches nothing; it never guesses.

    Examples
    --------
    >>> HostVersionResolver(forced_major=3).is_major_version_enabled(3)
    True
    >>> HostVersionResolver().is_major_version_enabled(2)
    False
    """

    _UNRESOLVED: Final = object()

    def __init__(self, *, forced_major: int | None = None, distribution: str | None = None) -> None:
        self._forced_major = forced_major
        self._distribution = distribution
        self._resolved: object = self._UNRESOLVED

    def major_version(self) -> int | None:
        """Return the host major version or ``None`` when it cannot be determined."""

        if self._resolved is self._UNRESOLVED:
            self._resolved = self._resolve()
        return self._resolved  # type: ignore[return-value]

    def is_major_version_enabled(self, target: int) -> bool:
        return self.major_version() == target

    def _resolve(self) -> int | None:
        if self._forced_major is not None:
            return self._forced_major
        if not self._distribution:
            log_debug("host_version_unknown", layer="guards", binding=None, reason="no distribution configured")
            return None
        try:
            version = metadata.version(self._distribution)
        except metadata.PackageNotFoundError:
            log_debug("host_version_unknown", layer="guards", binding=None, distribution=self._distribution)
            return None
        major = parse_major_version(version)
        log_debug("host_version_resolved", layer="guards", binding=None, distribution=self._distribution, major=major)
        return major


def parse_major_version(version: str) -> int | None:
    """Return the leading integer component of *version*.

    Examples
    --------
    >>> parse_major_version("3.2.1"), parse_major_version("v2"), parse_major_version("dev")
    (3, 2, None)
    """

    match = _MAJOR_PATTERN.match(version)
    return int(match.group(1)) if match else None
