"""Built-in processor registry.

The tuple order below is the registration order used by the dispatcher and
therefore the tie-break when two service types write the same key.
"""

from __future__ import annotations

from ..application.processor import MappingProcessor
from .databases import DB2, MYSQL, ORACLE, POSTGRESQL, SQLSERVER
from .datastores import (
    CASSANDRA_HOST2,
    CASSANDRA_HOST3,
    COUCHBASE,
    ELASTICSEARCH_HOST2,
    ELASTICSEARCH_HOST3,
    MONGODB,
    NEO4J,
    REDIS,
)
from .services import ARTEMIS, CONFIG, KAFKA, LDAP, RABBITMQ, WAVEFRONT

DEFAULT_PROCESSORS: tuple[MappingProcessor, ...] = (
    ARTEMIS,
    CASSANDRA_HOST2,
    CASSANDRA_HOST3,
    COUCHBASE,
    DB2,
    ELASTICSEARCH_HOST2,
    ELASTICSEARCH_HOST3,
    KAFKA,
    LDAP,
    MONGODB,
    MYSQL,
    NEO4J,
    ORACLE,
    POSTGRESQL,
    RABBITMQ,
    REDIS,
    SQLSERVER,
    CONFIG,
    WAVEFRONT,
)


def default_processors() -> tuple[MappingProcessor, ...]:
    """Return the built-in registry in registration order."""

    return DEFAULT_PROCESSORS


def supported_types() -> list[str]:
    """Return the distinct binding types handled by the built-in registry, sorted."""

    return sorted({processor.type for processor in DEFAULT_PROCESSORS})


__all__ = ["DEFAULT_PROCESSORS", "default_processors", "supported_types"]
