"""
Authentication Module - Black Box Interface

Purpose: Authenticate the blog admin and manage their session
Interface: AdminAuthService.login(), authenticate(), logout(), change_password()
Hidden: Password hashing, token generation, principal storage format

Built through AuthFactory; callers never construct the pieces themselves.
"""

from .errors import AuthError, DuplicatePrincipalError, HasherError, StorageError
from .factory import AuthFactory
from .models import ActiveSession, HashedPassword, Principal, PrincipalField
from .service import AdminAuthService, ChangePasswordOutcome, LoginResult

__all__ = [
    "AuthFactory",
    "AdminAuthService",
    "LoginResult",
    "ChangePasswordOutcome",
    "Principal",
    "ActiveSession",
    "HashedPassword",
    "PrincipalField",
    "AuthError",
    "StorageError",
    "DuplicatePrincipalError",
    "HasherError",
]
