"""Persistent storage for the last searched city."""

import logging
from typing import Optional, Protocol

import redis.asyncio as redis

from village_forecast.config import LAST_CITY_KEY, REDIS_URL

logger = logging.getLogger(__name__)


class CityStore(Protocol):
    """Stores a single city name across restarts."""

    async def load(self) -> Optional[str]:
        ...

    async def save(self, name: str) -> None:
        ...


class RedisCityStore:
    """City store backed by a single Redis key.

    Reads and writes never raise: if Redis is unavailable, load() behaves as
    if nothing was saved and save() is skipped.
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None, key: str = LAST_CITY_KEY):
        """Initialize the city store.

        Args:
            redis_client: Optional Redis client. If None, creates new client.
            key: Redis key holding the city name
        """
        self.redis_client = redis_client or redis.from_url(REDIS_URL, decode_responses=True)
        self.key = key

    async def load(self) -> Optional[str]:
        """Return the saved city name, or None if there is none."""
        try:
            value = await self.redis_client.get(self.key)
        except Exception as e:
            logger.error(f"Could not read last city from Redis: {e}")
            return None

        if isinstance(value, bytes):
            value = value.decode("utf-8")

        if not value:
            logger.info("No saved city found")
            return None

        logger.info(f"Loaded saved city: {value}")
        return value

    async def save(self, name: str) -> None:
        """Overwrite the saved city name."""
        try:
            await self.redis_client.set(self.key, name)
            logger.info(f"Saved last city: {name}")
        except Exception as e:
            logger.error(f"Could not save last city '{name}' to Redis: {e}")

    async def aclose(self):
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
