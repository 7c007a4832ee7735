"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _is_production() -> bool:
    return os.getenv("APP_ENV", os.getenv("NODE_ENV", "development")).lower() == "production"


@dataclass
class AuthConfig:
    """Authentication configuration."""
    session_lifetime_seconds: int
    token_length: int
    argon2_time_cost: Optional[int]
    argon2_memory_cost: Optional[int]
    argon2_parallelism: Optional[int]
    invalidate_session_on_password_change: bool
    audit_enabled: bool


@dataclass
class CookieConfig:
    """Admin session cookie configuration."""
    name: str
    path: str
    secure: bool
    samesite: str
    domain: Optional[str]


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_cookie_config(self) -> CookieConfig:
        """Get cookie configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        lifetime = int(os.getenv("SESSION_LIFETIME_SECONDS", "259200"))
        if lifetime <= 0:
            raise ValueError("SESSION_LIFETIME_SECONDS must be a positive number of seconds")

        return AuthConfig(
            session_lifetime_seconds=lifetime,
            token_length=int(os.getenv("TOKEN_LENGTH", "40")),
            argon2_time_cost=_optional_int("ARGON2_TIME_COST"),
            argon2_memory_cost=_optional_int("ARGON2_MEMORY_COST"),
            argon2_parallelism=_optional_int("ARGON2_PARALLELISM"),
            invalidate_session_on_password_change=_flag(
                "INVALIDATE_SESSION_ON_PASSWORD_CHANGE", "false"
            ),
            audit_enabled=_flag("AUDIT_ENABLED", "true"),
        )

    def get_cookie_config(self) -> CookieConfig:
        """
        Get cookie configuration from environment variables.

        Secure cookies and the cookie domain only apply in production so the
        admin site can be developed over plain HTTP on localhost.
        """
        production = _is_production()
        return CookieConfig(
            name=os.getenv("COOKIE_NAME", "adminUser"),
            path="/",
            secure=production,
            samesite="none" if production else "lax",
            domain=(os.getenv("COOKIE_DOMAIN") or None) if production else None,
        )
