"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the service facade (hiding implementation)
"""

import logging
from typing import Any, Optional

from ...config.provider import ConfigProvider
from .audit import NullAuditLog, RedisAuditLog
from .passwords import Argon2Hasher
from .service import AdminAuthService
from .store import InMemoryCredentialStore, RedisCredentialStore
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates all auth components
    - Wires them together via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build(config_provider: ConfigProvider, redis_client: Any) -> AdminAuthService:
        """
        Build the complete authentication stack on Redis.

        Args:
            config_provider: Configuration provider
            redis_client: Async Redis client for principals and audit events

        Returns:
            AdminAuthService facade
        """
        auth_config = config_provider.get_auth_config()

        hasher = Argon2Hasher(
            time_cost=auth_config.argon2_time_cost,
            memory_cost=auth_config.argon2_memory_cost,
            parallelism=auth_config.argon2_parallelism,
        )
        issuer = TokenIssuer(
            lifetime_seconds=auth_config.session_lifetime_seconds,
            token_length=auth_config.token_length,
        )

        if auth_config.audit_enabled:
            audit_log = RedisAuditLog(redis_client)
        else:
            logger.info("Auth audit trail disabled")
            audit_log = NullAuditLog()

        logger.info(
            f"Building authentication stack (session lifetime "
            f"{auth_config.session_lifetime_seconds}s, argon2 {hasher.parameters})"
        )

        return AdminAuthService(
            store=RedisCredentialStore(redis_client),
            hasher=hasher,
            issuer=issuer,
            audit_log=audit_log,
            invalidate_session_on_password_change=auth_config.invalidate_session_on_password_change,
        )

    @staticmethod
    def build_for_testing(
        store: Optional[Any] = None,
        hasher: Optional[Any] = None,
        clock: Optional[Any] = None,
        lifetime_seconds: Optional[int] = None,
        invalidate_session_on_password_change: bool = False,
    ) -> AdminAuthService:
        """
        Build auth stack for testing with an in-memory store and cheap hashing.

        Args:
            store: Credential store (defaults to InMemoryCredentialStore)
            hasher: Password hasher (defaults to a low-cost Argon2Hasher)
            clock: Shared clock for token issuance and expiry checks
            lifetime_seconds: Session lifetime override

        Returns:
            AdminAuthService for testing
        """
        issuer_kwargs = {"clock": clock}
        if lifetime_seconds is not None:
            issuer_kwargs["lifetime_seconds"] = lifetime_seconds

        return AdminAuthService(
            store=store or InMemoryCredentialStore(),
            hasher=hasher or Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1),
            issuer=TokenIssuer(**issuer_kwargs),
            clock=clock,
            invalidate_session_on_password_change=invalidate_session_on_password_change,
        )
