"""
Storage Module - Black Box Interface

Purpose: Abstract the Redis connection used for principals and audit events
Interface: StorageModule.connect(), StorageModule.disconnect()
Hidden: Redis URL construction, connection pooling, response decoding

Can be replaced with any storage backend without affecting other modules.
"""

from typing import Optional

import redis.asyncio as redis


class StorageModule:
    """Black box storage abstraction."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
    ):
        """Initialize storage with connection settings."""
        # Password is passed separately to avoid URL encoding issues
        self.url = f"redis://{host}:{port}/{db}"
        self.password = password
        self._client: Optional[redis.Redis] = None

    @classmethod
    def from_config(cls, config) -> "StorageModule":
        """Build from the config module."""
        return cls(
            host=config.get("redis_host"),
            port=config.get("redis_port"),
            db=config.get("redis_db"),
            password=config.get("redis_password"),
        )

    async def connect(self) -> redis.Redis:
        """Get storage connection."""
        if not self._client:
            self._client = redis.from_url(
                self.url,
                password=self.password,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def disconnect(self):
        """Close storage connection."""
        if self._client:
            await self._client.aclose()
            self._client = None


__all__ = ["StorageModule"]
