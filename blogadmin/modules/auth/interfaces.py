"""Authentication interfaces following Black Box Design principles."""
from typing import FrozenSet, Optional, Protocol

from .models import ALL_FIELDS, ActiveSession, HashedPassword, Principal, PrincipalField


class PasswordHasher(Protocol):
    """Protocol for one-way salted password hashing."""

    def hash(self, plaintext: str) -> HashedPassword:
        """Hash a plaintext password with a fresh salt."""
        ...

    def verify(self, plaintext: str, hashed: HashedPassword) -> bool:
        """
        Verify a password.

        Returns False on mismatch; raises HasherError if the primitive fails.
        """
        ...


class SessionIssuer(Protocol):
    """Protocol for session token issuance."""

    def issue(self) -> ActiveSession:
        """Issue a new token and its expiry."""
        ...


class CredentialStore(Protocol):
    """
    Protocol for principal persistence - allows swappable backends.

    All methods raise StorageError on storage faults.
    """

    async def find_by_email(self, email: str) -> Optional[Principal]:
        ...

    async def find_by_id(self, principal_id: str) -> Optional[Principal]:
        ...

    async def save(
        self, principal: Principal, fields: FrozenSet[PrincipalField] = ALL_FIELDS
    ) -> None:
        """Atomically write the given fields of an existing principal."""
        ...

    async def create(self, principal: Principal) -> None:
        """Insert a new principal; raises DuplicatePrincipalError on id/email clash."""
        ...


class AuditLog(Protocol):
    """Protocol for security event recording."""

    async def record(self, event_type: str, data: dict) -> None:
        ...
