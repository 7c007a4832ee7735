"""
Password hashing for the admin principal.

Uses argon2id through argon2-cffi. Every hash carries its own random salt
and work-factor parameters, so verification works no matter which salt or
parameters were used when the hash was produced.
"""

import logging
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from .errors import HasherError
from .models import HashedPassword

logger = logging.getLogger(__name__)


class Argon2Hasher:
    """
    Salted, deliberately slow one-way password hash.

    The work factor is tunable through time_cost, memory_cost (KiB) and
    parallelism. Anything left as None uses the argon2-cffi default.
    """

    def __init__(
        self,
        time_cost: Optional[int] = None,
        memory_cost: Optional[int] = None,
        parallelism: Optional[int] = None,
    ):
        params = {
            "time_cost": time_cost,
            "memory_cost": memory_cost,
            "parallelism": parallelism,
        }
        self._hasher = PasswordHasher(**{k: v for k, v in params.items() if v is not None})

    @property
    def parameters(self) -> dict:
        """Current work-factor parameters."""
        return {
            "time_cost": self._hasher.time_cost,
            "memory_cost": self._hasher.memory_cost,
            "parallelism": self._hasher.parallelism,
        }

    def hash(self, plaintext: str) -> HashedPassword:
        """
        Hash a plaintext password with a fresh salt.

        Raises:
            ValueError: If the password is empty
            HasherError: If the argon2 primitive fails
        """
        if not plaintext:
            raise ValueError("Password cannot be empty")
        try:
            return HashedPassword(self._hasher.hash(plaintext))
        except HashingError as e:
            raise HasherError(f"Password hashing failed: {e}") from e

    def verify(self, plaintext: str, hashed: HashedPassword) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns:
            True if the password matches, False on any mismatch

        Raises:
            HasherError: If the stored hash is unreadable or verification
                itself fails
        """
        if not plaintext:
            return False
        try:
            return self._hasher.verify(hashed.encoded, plaintext)
        except VerifyMismatchError:
            return False
        except InvalidHashError as e:
            raise HasherError("Stored password hash is not a valid argon2 hash") from e
        except VerificationError as e:
            raise HasherError(f"Password verification failed: {e}") from e

    def needs_rehash(self, hashed: HashedPassword) -> bool:
        """True if the hash was produced with different parameters than the current ones."""
        try:
            return self._hasher.check_needs_rehash(hashed.encoded)
        except InvalidHashError as e:
            raise HasherError("Stored password hash is not a valid argon2 hash") from e
