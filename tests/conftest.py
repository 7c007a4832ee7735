"""
Shared pytest fixtures for Blog Admin tests.

This module provides common fixtures including:
- A controllable unix clock for expiry tests
- A cheap argon2 hasher so tests do not spend seconds hashing
- An in-memory credential store and auth service wired to both
- Redis mocks for the Redis-backed store and audit log
"""

import asyncio
import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blogadmin.modules.auth import AuthFactory
from blogadmin.modules.auth.errors import StorageError
from blogadmin.modules.auth.models import ALL_FIELDS
from blogadmin.modules.auth.passwords import Argon2Hasher
from blogadmin.modules.auth.store import InMemoryCredentialStore

ADMIN_EMAIL = "a@x.com"
ADMIN_PASSWORD = "secret1"


class FakeClock:
    """Unix-seconds clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class FaultyStore(InMemoryCredentialStore):
    """In-memory store whose reads and writes can be made to fail."""

    def __init__(self):
        super().__init__()
        self.fail_saves = False
        self.fail_reads = False

    async def save(self, principal, fields=ALL_FIELDS):
        if self.fail_saves:
            raise StorageError("connection reset")
        await super().save(principal, fields)

    async def find_by_id(self, principal_id):
        if self.fail_reads:
            raise StorageError("connection reset")
        return await super().find_by_id(principal_id)

    async def find_by_email(self, email):
        if self.fail_reads:
            raise StorageError("connection reset")
        return await super().find_by_email(email)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def hasher():
    """Argon2 hasher with the lowest work factor argon2 accepts."""
    return Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def store():
    return FaultyStore()


@pytest.fixture
def auth_service(store, hasher, clock):
    return AuthFactory.build_for_testing(store=store, hasher=hasher, clock=clock)


@pytest_asyncio.fixture
async def admin(auth_service):
    """The provisioned admin principal."""
    return await auth_service.provision(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def provisioned_admin(auth_service):
    """Same as admin, for synchronous (HTTP client) tests."""
    return asyncio.run(auth_service.provision(ADMIN_EMAIL, ADMIN_PASSWORD))


@pytest.fixture
def redis_mock():
    """
    Create a mock Redis client.

    WATCH/MULTI transactions run their callback against redis_mock.pipe,
    whose get/exists answer as an empty database by default.
    """
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.lpush = AsyncMock()
    redis.ltrim = AsyncMock()

    pipe = MagicMock()
    pipe.get = AsyncMock(return_value=None)
    pipe.exists = AsyncMock(return_value=0)

    async def transaction(func, *watches):
        await func(pipe)
        return []

    redis.transaction = AsyncMock(side_effect=transaction)
    redis.pipe = pipe
    return redis
