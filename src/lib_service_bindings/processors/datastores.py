"""Non-relational data store processors.

Cassandra and Elasticsearch changed their property namespace between host
major versions 2 and 3, so each has one record per version.
"""

from __future__ import annotations

from ..application.processor import MappingProcessor
from ..application.rules import Rename, renames

CASSANDRA_KEYS = (
    "cluster-name",
    "compression",
    "contact-points",
    "keyspace-name",
    "password",
    "port",
    "ssl",
    "username",
    "request.throttler.drain-interval",
    "request.throttler.max-concurrent-requests",
    "request.throttler.max-queue-size",
    "request.throttler.max-requests-per-second",
)

CASSANDRA_HOST2 = MappingProcessor("cassandra", renames("spring.data.cassandra", *CASSANDRA_KEYS), host_version=2)
CASSANDRA_HOST3 = MappingProcessor("cassandra", renames("spring.cassandra", *CASSANDRA_KEYS), host_version=3)

COUCHBASE = MappingProcessor(
    "couchbase",
    (
        *renames("spring.couchbase", "connection-string", "username", "password"),
        Rename("bucket.name", "spring.data.couchbase.bucket-name"),
    ),
)

ELASTICSEARCH_HOST2 = MappingProcessor(
    "elasticsearch",
    (
        Rename("endpoints", "spring.elasticsearch.rest.uris"),
        *renames("spring.elasticsearch.rest", "username", "password"),
    ),
    host_version=2,
)
ELASTICSEARCH_HOST3 = MappingProcessor(
    "elasticsearch",
    (
        Rename("endpoints", "spring.elasticsearch.uris"),
        *renames("spring.elasticsearch", "username", "password"),
    ),
    host_version=3,
)

MONGODB = MappingProcessor(
    "mongodb",
    (
        Rename("authentication-database", "spring.data.mongodb.authentication-database"),
        Rename("database", "spring.data.mongodb.database"),
        Rename("grid-fs-database", "spring.data.mongodb.gridfs.database"),
        *renames("spring.data.mongodb", "host", "password", "port", "uri", "username"),
    ),
)

NEO4J = MappingProcessor(
    "neo4j",
    (
        Rename("password", "spring.neo4j.authentication.password"),
        Rename("uri", "spring.neo4j.uri"),
        Rename("username", "spring.neo4j.authentication.username"),
    ),
)

REDIS = MappingProcessor(
    "redis",
    renames(
        "spring.redis",
        "client-name",
        "cluster.max-redirects",
        "cluster.nodes",
        "database",
        "host",
        "password",
        "port",
        "sentinel.master",
        "sentinel.nodes",
        "sentinel.password",
        "sentinel.username",
        "ssl",
        "url",
        "username",
    ),
)
