from __future__ import annotations

import pytest

from lib_service_bindings.adapters.env.default import DefaultEnvironmentSource, relaxed_env_key

KEY = "org.springframework.cloud.bindings.boot.redis.enable"


def test_exact_key_wins_over_relaxed() -> None:
    source = DefaultEnvironmentSource(environ={KEY: "exact", relaxed_env_key(KEY): "relaxed"})
    assert source.get(KEY) == "exact"


def test_relaxed_key_is_used_as_fallback() -> None:
    source = DefaultEnvironmentSource(environ={"ORG_SPRINGFRAMEWORK_CLOUD_BINDINGS_BOOT_REDIS_ENABLE": "false"})
    assert source.get(KEY) == "false"


def test_overrides_take_precedence() -> None:
    source = DefaultEnvironmentSource(environ={KEY: "true"}, overrides={KEY: "false"})
    assert source.get(KEY) == "false"


def test_defaults_to_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ORG_SPRINGFRAMEWORK_CLOUD_BINDINGS_BOOT_LDAP_ENABLE", "false")
    assert DefaultEnvironmentSource().get("org.springframework.cloud.bindings.boot.ldap.enable") == "false"


def test_missing_key_returns_none() -> None:
    assert DefaultEnvironmentSource(environ={}).get(KEY) is None


@pytest.mark.parametrize(
    ("key", "expected"),
    [("a.b-c.d", "A_B_C_D"), ("already_UPPER", "ALREADY_UPPER"), ("x/y z", "X_Y_Z")],
)
def test_relaxed_env_key(key: str, expected: str) -> None:
    assert relaxed_env_key(key) == expected
