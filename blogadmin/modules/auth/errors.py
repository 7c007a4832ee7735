"""
Authentication error types.

Only infrastructure faults are exceptions. A missing principal, a wrong
password or token, and an expired session are ordinary return values that
the service logs and collapses into a generic failure.
"""


class AuthError(Exception):
    """Base class for authentication infrastructure faults."""


class StorageError(AuthError):
    """The credential store failed to read or write a principal."""


class DuplicatePrincipalError(StorageError):
    """A principal with the same id or email already exists."""


class HasherError(AuthError):
    """The password hashing primitive failed (not a mismatch)."""
