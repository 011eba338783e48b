"""Messaging, directory, configuration-server and telemetry processors."""

from __future__ import annotations

from ..application.processor import MappingProcessor
from ..application.rules import Rename, renames

ARTEMIS = MappingProcessor("artemis", renames("spring.artemis", "mode", "broker-url", "user", "password"))

KAFKA = MappingProcessor(
    "kafka",
    tuple(
        Rename("bootstrap-servers", f"spring.kafka.{scope}bootstrap-servers")
        for scope in ("", "consumer.", "producer.", "streams.")
    ),
)

RABBITMQ = MappingProcessor(
    "rabbitmq",
    renames("spring.rabbitmq", "addresses", "host", "password", "port", "username", "virtual-host"),
)

LDAP = MappingProcessor("ldap", renames("spring.ldap", "base", "password", "urls", "username"))

CONFIG = MappingProcessor(
    "config",
    (
        Rename("uri", "spring.cloud.config.uri"),
        *renames("spring.cloud.config.client.oauth2", "client-id", "client-secret", "access-token-uri"),
    ),
)

WAVEFRONT = MappingProcessor(
    "wavefront",
    (
        Rename("api-token", "management.wavefront.api-token"),
        Rename("uri", "management.wavefront.uri"),
    ),
)
