"""
Admin principal data model.

The principal is the single administrative identity of the blog. Its
session is modelled as one optional value so a token can never exist
without its expiry (or the other way round).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class HashedPassword:
    """
    An already-hashed password in encoded form.

    Instances come from PasswordHasher.hash() or from loading a stored
    principal, never from request input.
    """

    encoded: str

    def __post_init__(self):
        if not self.encoded:
            raise ValueError("Hashed password cannot be empty")

    def __repr__(self) -> str:
        return "HashedPassword(<redacted>)"


@dataclass(frozen=True)
class ActiveSession:
    """Session token paired with its expiry (unix seconds)."""

    token: str
    expires_at: int

    def __repr__(self) -> str:
        return f"ActiveSession(token=<redacted>, expires_at={self.expires_at})"


class PrincipalField(str, Enum):
    """Mutable parts of a principal that a save can touch."""

    PASSWORD = "password"
    SESSION = "session"


ALL_FIELDS: FrozenSet[PrincipalField] = frozenset(PrincipalField)


@dataclass(frozen=True)
class Principal:
    """Admin user record."""

    id: str
    email: str
    password_hash: HashedPassword
    session: Optional[ActiveSession] = None

    def with_session(self, session: Optional[ActiveSession]) -> "Principal":
        """Return a copy with the session replaced (None clears it)."""
        return replace(self, session=session)

    def with_password(self, password_hash: HashedPassword) -> "Principal":
        """Return a copy with the password hash replaced."""
        if not isinstance(password_hash, HashedPassword):
            raise TypeError("Principal password must be a HashedPassword")
        return replace(self, password_hash=password_hash)

    def with_fields_from(
        self, other: "Principal", fields: FrozenSet[PrincipalField]
    ) -> "Principal":
        """Return a copy that takes the given fields from other."""
        updated = self
        if PrincipalField.PASSWORD in fields:
            updated = updated.with_password(other.password_hash)
        if PrincipalField.SESSION in fields:
            updated = updated.with_session(other.session)
        return updated
