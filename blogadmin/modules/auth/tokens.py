"""
Session token issuance.
"""

import secrets
import string
import time
from typing import Callable, Optional

from .models import ActiveSession

TOKEN_ALPHABET = string.ascii_letters + string.digits
DEFAULT_TOKEN_LENGTH = 40
DEFAULT_SESSION_LIFETIME = 86400 * 3  # 3 days


def unix_now() -> int:
    """Current wall-clock time in whole seconds since the epoch."""
    return int(time.time())


def random_string(length: int) -> str:
    """Alphanumeric string drawn from the OS CSPRNG."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


class TokenIssuer:
    """
    Generates opaque session tokens and their expiry.

    Tokens come from the secrets module, never from random. Persisting the
    issued session is the caller's job.
    """

    def __init__(
        self,
        lifetime_seconds: int = DEFAULT_SESSION_LIFETIME,
        token_length: int = DEFAULT_TOKEN_LENGTH,
        clock: Optional[Callable[[], int]] = None,
    ):
        if lifetime_seconds <= 0:
            raise ValueError("Session lifetime must be positive")
        if token_length < 16:
            raise ValueError("Token length must be at least 16 characters")

        self.lifetime_seconds = lifetime_seconds
        self.token_length = token_length
        self._clock = clock or unix_now

    def issue(self) -> ActiveSession:
        """Issue a new token expiring lifetime_seconds from now."""
        return ActiveSession(
            token=random_string(self.token_length),
            expires_at=self._clock() + self.lifetime_seconds,
        )
