"""
Unit tests for configuration loading.
"""

import os
from unittest.mock import patch

import pytest

from blogadmin.config.provider import EnvConfigProvider
from blogadmin.modules.auth import AuthFactory
from blogadmin.modules.auth.audit import NullAuditLog, RedisAuditLog
from blogadmin.modules.auth.store import RedisCredentialStore
from blogadmin.modules.config import ConfigModule


def test_config_module_defaults():
    with patch.dict(os.environ, {}, clear=True):
        config = ConfigModule()

    assert config.get("redis_host") == "localhost"
    assert config.get("redis_port") == 6379
    assert config.get("port") == 5001
    assert config.get("log_level") == "INFO"
    assert config.get("debug") is False


def test_config_module_reads_env():
    env = {
        "REDIS_HOST": "redis",
        "REDIS_PORT": "tcp://10.0.0.5:6380",
        "REDIS_PASSWORD": "pw",
        "API_PORT": "8080",
        "DEBUG": "true",
    }
    with patch.dict(os.environ, env, clear=True):
        config = ConfigModule()

    assert config.get("redis_host") == "redis"
    assert config.get("redis_port") == 6380
    assert config.get("redis_password") == "pw"
    assert config.get("port") == 8080
    assert config.get("debug") is True


def test_config_schema_lists_required_keys():
    schema = ConfigModule.get_config_schema()

    assert "redis_host" in schema["required"]
    assert "redis_password" in schema["optional"]


def test_auth_config_defaults():
    with patch.dict(os.environ, {}, clear=True):
        auth_config = EnvConfigProvider().get_auth_config()

    assert auth_config.session_lifetime_seconds == 259200
    assert auth_config.token_length == 40
    assert auth_config.argon2_time_cost is None
    assert auth_config.invalidate_session_on_password_change is False
    assert auth_config.audit_enabled is True


def test_auth_config_from_env():
    env = {
        "SESSION_LIFETIME_SECONDS": "3600",
        "ARGON2_TIME_COST": "4",
        "INVALIDATE_SESSION_ON_PASSWORD_CHANGE": "true",
        "AUDIT_ENABLED": "false",
    }
    with patch.dict(os.environ, env, clear=True):
        auth_config = EnvConfigProvider().get_auth_config()

    assert auth_config.session_lifetime_seconds == 3600
    assert auth_config.argon2_time_cost == 4
    assert auth_config.invalidate_session_on_password_change is True
    assert auth_config.audit_enabled is False


def test_auth_config_rejects_non_positive_lifetime():
    with patch.dict(os.environ, {"SESSION_LIFETIME_SECONDS": "0"}, clear=True):
        with pytest.raises(ValueError):
            EnvConfigProvider().get_auth_config()


def test_cookie_config_development():
    with patch.dict(os.environ, {"COOKIE_DOMAIN": "example.com"}, clear=True):
        cookie = EnvConfigProvider().get_cookie_config()

    assert cookie.name == "adminUser"
    assert cookie.secure is False
    assert cookie.domain is None


def test_cookie_config_production():
    env = {"NODE_ENV": "production", "COOKIE_DOMAIN": "example.com"}
    with patch.dict(os.environ, env, clear=True):
        cookie = EnvConfigProvider().get_cookie_config()

    assert cookie.secure is True
    assert cookie.samesite == "none"
    assert cookie.domain == "example.com"


def test_factory_builds_redis_stack(redis_mock):
    env = {"ARGON2_TIME_COST": "1", "ARGON2_MEMORY_COST": "8", "ARGON2_PARALLELISM": "1"}
    with patch.dict(os.environ, env, clear=True):
        service = AuthFactory.build(EnvConfigProvider(), redis_mock)

    assert isinstance(service.store, RedisCredentialStore)
    assert isinstance(service.audit_log, RedisAuditLog)
    assert service.hasher.parameters == {"time_cost": 1, "memory_cost": 8, "parallelism": 1}
    assert service.issuer.lifetime_seconds == 259200


def test_factory_without_audit(redis_mock):
    with patch.dict(os.environ, {"AUDIT_ENABLED": "false"}, clear=True):
        service = AuthFactory.build(EnvConfigProvider(), redis_mock)

    assert isinstance(service.audit_log, NullAuditLog)
