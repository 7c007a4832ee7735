"""
Credential store backends.

The Redis backend keeps one JSON document per principal under
admin-user:<id> plus an email index under admin-user:email:<email>.
A save names the fields it writes (password, session) and leaves the rest
of the stored document as it is.
"""

import json
import logging
from typing import Dict, FrozenSet, Optional

import redis.asyncio as redis

from .errors import DuplicatePrincipalError, StorageError
from .models import ALL_FIELDS, ActiveSession, HashedPassword, Principal, PrincipalField

logger = logging.getLogger(__name__)

PRINCIPAL_KEY_PREFIX = "admin-user"


def principal_key(principal_id: str) -> str:
    return f"{PRINCIPAL_KEY_PREFIX}:{principal_id}"


def email_key(email: str) -> str:
    return f"{PRINCIPAL_KEY_PREFIX}:email:{email}"


def encode_principal(principal: Principal) -> str:
    """
    Serialize a principal to its stored JSON document.

    Raises:
        TypeError: If the password is not a HashedPassword
    """
    if not isinstance(principal.password_hash, HashedPassword):
        raise TypeError("Refusing to store a password that has not been hashed")

    session = principal.session
    return json.dumps(
        {
            "id": principal.id,
            "email": principal.email,
            "password": principal.password_hash.encoded,
            "authToken": session.token if session else None,
            "authTokenExpiresTimestamp": session.expires_at if session else None,
        }
    )


def decode_principal(raw) -> Principal:
    """
    Parse a stored JSON document back into a principal.

    Raises:
        StorageError: If the document is malformed
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        token = data.get("authToken")
        expires_at = data.get("authTokenExpiresTimestamp")
        if (token is None) != (expires_at is None):
            raise ValueError("authToken and authTokenExpiresTimestamp must be set together")

        return Principal(
            id=data["id"],
            email=data["email"],
            password_hash=HashedPassword(data["password"]),
            session=ActiveSession(token, int(expires_at)) if token is not None else None,
        )
    except (ValueError, KeyError, TypeError) as e:
        raise StorageError(f"Corrupt principal record: {e}") from e


class RedisCredentialStore:
    """
    Redis-backed credential store.

    Works for any number of principals. Writes run as WATCH/MULTI
    transactions: a save rewrites only the fields it touches on top of the
    currently stored document, and a create claims the email index and the
    document together.
    """

    def __init__(self, redis_client):
        """
        Initialize credential store.

        Args:
            redis_client: Async Redis client
        """
        self.redis = redis_client

    async def find_by_id(self, principal_id: str) -> Optional[Principal]:
        try:
            raw = await self.redis.get(principal_key(principal_id))
        except redis.RedisError as e:
            raise StorageError(f"Failed to load principal: {e}") from e

        if raw is None:
            return None
        return decode_principal(raw)

    async def find_by_email(self, email: str) -> Optional[Principal]:
        try:
            principal_id = await self.redis.get(email_key(email))
        except redis.RedisError as e:
            raise StorageError(f"Failed to look up principal by email: {e}") from e

        if principal_id is None:
            return None
        if isinstance(principal_id, bytes):
            principal_id = principal_id.decode("utf-8")
        return await self.find_by_id(principal_id)

    async def save(
        self, principal: Principal, fields: FrozenSet[PrincipalField] = ALL_FIELDS
    ) -> None:
        """
        Write the given fields of an existing principal in one transaction.

        Fields not listed keep their stored values, so a login saving its
        session cannot undo a password change that committed meanwhile.

        Raises:
            StorageError: If the write fails or the principal was never created
        """
        encode_principal(principal)  # rejects unhashed passwords before any I/O
        key = principal_key(principal.id)

        async def replace_fields(pipe):
            raw = await pipe.get(key)
            if raw is None:
                raise StorageError(f"Principal {principal.id} does not exist")
            stored = decode_principal(raw)
            document = encode_principal(stored.with_fields_from(principal, fields))
            pipe.multi()
            pipe.set(key, document)

        try:
            await self.redis.transaction(replace_fields, key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to save principal: {e}") from e

    async def create(self, principal: Principal) -> None:
        """
        Insert a new principal.

        Raises:
            DuplicatePrincipalError: If the id or email is already taken
            StorageError: If a write fails
        """
        document = encode_principal(principal)
        index = email_key(principal.email)
        key = principal_key(principal.id)

        async def claim(pipe):
            if await pipe.exists(index):
                raise DuplicatePrincipalError(f"Email already registered: {principal.email}")
            if await pipe.exists(key):
                raise DuplicatePrincipalError(f"Principal id already exists: {principal.id}")
            pipe.multi()
            pipe.set(index, principal.id)
            pipe.set(key, document)

        try:
            await self.redis.transaction(claim, index, key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to create principal: {e}") from e

        logger.info(f"Created principal {principal.id}")


class InMemoryCredentialStore:
    """
    Process-local credential store.

    Keeps the encoded documents rather than the objects so it behaves like
    the Redis backend (including the hashed-password check on write).
    """

    def __init__(self):
        self._documents: Dict[str, str] = {}
        self._emails: Dict[str, str] = {}

    async def find_by_id(self, principal_id: str) -> Optional[Principal]:
        raw = self._documents.get(principal_id)
        return decode_principal(raw) if raw is not None else None

    async def find_by_email(self, email: str) -> Optional[Principal]:
        principal_id = self._emails.get(email)
        if principal_id is None:
            return None
        return await self.find_by_id(principal_id)

    async def save(
        self, principal: Principal, fields: FrozenSet[PrincipalField] = ALL_FIELDS
    ) -> None:
        encode_principal(principal)
        raw = self._documents.get(principal.id)
        if raw is None:
            raise StorageError(f"Principal {principal.id} does not exist")
        stored = decode_principal(raw)
        self._documents[principal.id] = encode_principal(
            stored.with_fields_from(principal, fields)
        )

    async def create(self, principal: Principal) -> None:
        document = encode_principal(principal)
        if principal.email in self._emails:
            raise DuplicatePrincipalError(f"Email already registered: {principal.email}")
        if principal.id in self._documents:
            raise DuplicatePrincipalError(f"Principal id already exists: {principal.id}")
        self._emails[principal.email] = principal.id
        self._documents[principal.id] = document
