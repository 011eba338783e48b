"""Environment source adapter.

Purpose
-------
Implement the :class:`lib_service_bindings.application.ports.EnvironmentSource`
protocol over a plain mapping (process environment, host configuration, test
dictionaries).

Key behaviours
--------------
* Exact key lookup first (``org.springframework.cloud.bindings.boot.redis.enable``).
* Falls back to the relaxed environment-variable spelling
  (``ORG_SPRINGFRAMEWORK_CLOUD_BINDINGS_BOOT_REDIS_ENABLE``) because shells
  cannot export dotted or dashed names.
* Optional ``overrides`` take precedence over the underlying mapping.
"""

from __future__ import annotations

import os
import re
from typing import Mapping

from ...observability import log_debug

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9]")


def relaxed_env_key(key: str) -> str:
    """Return the environment-variable spelling of a dotted property *key*.

    Examples
    --------
    >>> relaxed_env_key('org.springframework.cloud.bindings.boot.my-type.enable')
    'ORG_SPRINGFRAMEWORK_CLOUD_BINDINGS_BOOT_MY_TYPE_ENABLE'
    """

    return _NON_IDENTIFIER.sub("_", key).upper()


class DefaultEnvironmentSource:
    """Look up flags in a mapping, honouring relaxed environment spellings.

    Examples
    --------
    >>> source = DefaultEnvironmentSource(environ={'ORG_SPRINGFRAMEWORK_CLOUD_BINDINGS_BOOT_REDIS_ENABLE': 'false'})
    >>> source.get('org.springframework.cloud.bindings.boot.redis.enable')
    'false'
    >>> source.get('missing') is None
    True
    """

    def __init__(self, *, environ: Mapping[str, str] | None = None, overrides: Mapping[str, str] | None = None) -> None:
        """Initialise the source.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        overrides:
            Entries consulted before *environ* (used by the CLI ``--property``).
        """

        self._environ = os.environ if environ is None else environ
        self._overrides = dict(overrides or {})

    def get(self, key: str) -> str | None:
        for source in (self._overrides, self._environ):
            if key in source:
                return source[key]
            relaxed = relaxed_env_key(key)
            if relaxed in source:
                log_debug("environment_relaxed_match", layer="env", binding=None, key=key)
                return source[relaxed]
        return None
