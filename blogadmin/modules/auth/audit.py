"""
Security event audit trail.

Events go to a capped Redis list so the latest logins, logouts and
password changes can be reviewed without a separate log pipeline.
"""

import json
import logging
from datetime import UTC, datetime

import redis.asyncio as redis

logger = logging.getLogger(__name__)

AUDIT_KEY = "auth:audit"
AUDIT_MAX_EVENTS = 10000


class RedisAuditLog:
    """Writes auth events to the auth:audit Redis list."""

    def __init__(self, redis_client, max_events: int = AUDIT_MAX_EVENTS):
        self.redis = redis_client
        self.max_events = max_events

    async def record(self, event_type: str, data: dict) -> None:
        """
        Record a security event.

        An unavailable audit list never blocks authentication; the failure is
        logged instead.

        Args:
            event_type: Type of security event
            data: Event data (never credentials or tokens)
        """
        event = {
            "type": event_type,
            "data": data,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        try:
            await self.redis.lpush(AUDIT_KEY, json.dumps(event))
            # Keep last max_events
            await self.redis.ltrim(AUDIT_KEY, 0, self.max_events - 1)
        except redis.RedisError as e:
            logger.warning(f"Failed to record audit event {event_type}: {e}")


class NullAuditLog:
    """Audit log that discards events."""

    async def record(self, event_type: str, data: dict) -> None:
        return None
