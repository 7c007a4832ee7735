"""
Admin Authentication Service following Black Box Design principles.

This module provides:
- Login, session authentication, logout and password change for the admin
- Uniform failure results that never reveal which step failed
- One-time provisioning of the admin principal

Storage and hashing faults are logged as errors here and collapsed into the
same generic failure that a wrong password produces.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .audit import NullAuditLog
from .errors import HasherError, StorageError
from .interfaces import AuditLog, CredentialStore, PasswordHasher, SessionIssuer
from .models import Principal, PrincipalField
from .session import SessionCheck, check_session
from .tokens import random_string, unix_now

logger = logging.getLogger(__name__)

PRINCIPAL_ID_LENGTH = 20

SESSION_ONLY = frozenset({PrincipalField.SESSION})


@dataclass(frozen=True)
class LoginResult:
    """Standardized login result."""

    ok: bool
    subject_id: Optional[str] = None
    token: Optional[str] = None
    expires_at: Optional[int] = None

    @classmethod
    def failed(cls) -> "LoginResult":
        return cls(ok=False)


class ChangePasswordOutcome(str, Enum):
    """Caller-visible outcome of a password change."""

    SUCCESS = "success"
    INVALID_CURRENT_CREDENTIAL = "invalid_current_credential"
    SUBMIT_ERROR = "submit_error"


class AdminAuthService:
    """
    Orchestrates the credential store, password hasher and token issuer.

    Password hashing and verification are CPU-bound and run in a worker
    thread so they do not stall the event loop.
    """

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        issuer: SessionIssuer,
        audit_log: Optional[AuditLog] = None,
        clock: Optional[Callable[[], int]] = None,
        invalidate_session_on_password_change: bool = False,
    ):
        """
        Initialize with injected dependencies.

        Args:
            store: Credential store holding the principal
            hasher: Password hasher
            issuer: Session token issuer
            audit_log: Optional security event sink
            clock: Unix-seconds clock used for expiry checks
            invalidate_session_on_password_change: Clear the active session
                when the password changes (off by default)
        """
        self.store = store
        self.hasher = hasher
        self.issuer = issuer
        self.audit_log = audit_log or NullAuditLog()
        self._clock = clock or unix_now
        self.invalidate_session_on_password_change = invalidate_session_on_password_change

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Verify email and password and start a new session.

        A new session replaces any previous one, so earlier tokens stop
        working immediately.

        Returns:
            LoginResult with subject id, token and expiry on success,
            LoginResult.failed() for every kind of failure
        """
        if not email or not password:
            return LoginResult.failed()

        try:
            principal = await self.store.find_by_email(email)
            if principal is None:
                logger.info("Login rejected: no principal for email")
                await self.audit_log.record("login_failed", {"reason": "not_found"})
                return LoginResult.failed()

            if not await self._verify(password, principal):
                logger.info(f"Login rejected for {principal.id}: password mismatch")
                await self.audit_log.record(
                    "login_failed", {"subject_id": principal.id, "reason": "credential_mismatch"}
                )
                return LoginResult.failed()

            session = self.issuer.issue()
            await self.store.save(principal.with_session(session), SESSION_ONLY)
        except StorageError as e:
            logger.error(f"Login failed on storage fault: {e}")
            return LoginResult.failed()
        except HasherError as e:
            logger.error(f"Login failed on hasher fault: {e}")
            return LoginResult.failed()

        logger.info(f"Admin {principal.id} logged in")
        await self.audit_log.record("login_succeeded", {"subject_id": principal.id})

        return LoginResult(
            ok=True,
            subject_id=principal.id,
            token=session.token,
            expires_at=session.expires_at,
        )

    async def authenticate(self, subject_id: str, token: str) -> bool:
        """
        Check a presented (subject id, token) pair.

        Unknown subject, wrong token and expired session all return False.
        """
        if not subject_id or not token:
            return False

        try:
            principal = await self.store.find_by_id(subject_id)
        except StorageError as e:
            logger.error(f"Authentication failed on storage fault: {e}")
            return False

        result = check_session(principal, token, self._clock())
        if result is not SessionCheck.VALID:
            logger.info(f"Session rejected for {subject_id}: {result.value}")
            return False
        return True

    async def logout(self, subject_id: str) -> bool:
        """
        Clear the subject's active session.

        The caller must already have authenticated the session.
        """
        try:
            principal = await self.store.find_by_id(subject_id)
            if principal is None:
                logger.warning(f"Logout for unknown principal {subject_id}")
                return False

            await self.store.save(principal.with_session(None), SESSION_ONLY)
        except StorageError as e:
            logger.error(f"Logout failed on storage fault: {e}")
            return False

        logger.info(f"Admin {subject_id} logged out")
        await self.audit_log.record("logout", {"subject_id": subject_id})
        return True

    async def change_password(
        self, subject_id: str, current_password: str, new_password: str
    ) -> ChangePasswordOutcome:
        """
        Replace the subject's password after checking the current one.

        The caller must already have authenticated the session, which is why
        a wrong current password gets its own outcome here.
        """
        if not new_password:
            return ChangePasswordOutcome.SUBMIT_ERROR

        try:
            principal = await self.store.find_by_id(subject_id)
            if principal is None:
                logger.warning(f"Password change for unknown principal {subject_id}")
                return ChangePasswordOutcome.SUBMIT_ERROR

            if not await self._verify(current_password, principal):
                logger.info(f"Password change rejected for {subject_id}: wrong current password")
                await self.audit_log.record(
                    "password_change_failed",
                    {"subject_id": subject_id, "reason": "credential_mismatch"},
                )
                return ChangePasswordOutcome.INVALID_CURRENT_CREDENTIAL

            new_hash = await asyncio.to_thread(self.hasher.hash, new_password)
            updated = principal.with_password(new_hash)
            fields = {PrincipalField.PASSWORD}
            if self.invalidate_session_on_password_change:
                updated = updated.with_session(None)
                fields.add(PrincipalField.SESSION)

            await self.store.save(updated, frozenset(fields))
        except StorageError as e:
            logger.error(f"Password change failed on storage fault: {e}")
            return ChangePasswordOutcome.SUBMIT_ERROR
        except HasherError as e:
            logger.error(f"Password change failed on hasher fault: {e}")
            return ChangePasswordOutcome.SUBMIT_ERROR

        logger.info(f"Admin {subject_id} changed password")
        await self.audit_log.record("password_changed", {"subject_id": subject_id})
        return ChangePasswordOutcome.SUCCESS

    async def provision(
        self, email: str, password: str, principal_id: Optional[str] = None
    ) -> Principal:
        """
        Create the admin principal with an explicitly hashed password.

        Errors propagate: provisioning is a one-time operator action.

        Raises:
            ValueError: If email or password is empty
            DuplicatePrincipalError: If the id or email is taken
            StorageError, HasherError: On infrastructure faults
        """
        if not email:
            raise ValueError("Email cannot be empty")

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        principal = Principal(
            id=principal_id or random_string(PRINCIPAL_ID_LENGTH),
            email=email,
            password_hash=password_hash,
        )
        await self.store.create(principal)
        await self.audit_log.record("principal_provisioned", {"subject_id": principal.id})
        return principal

    async def _verify(self, password: str, principal: Principal) -> bool:
        return await asyncio.to_thread(self.hasher.verify, password, principal.password_hash)
