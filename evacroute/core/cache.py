"""
@file cache.py
@brief Redis store for the read-only GeoJSON views
@details
Only the road network and active flood zone views are stored; computed
routes never are. Redis is optional: without a connection, or when a
command fails, lookups miss and writes are dropped.

@author EvacRoute Project
@date 2026-10-18
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis

from evacroute.core import config

logger = logging.getLogger(__name__)


class RedisCache:
    """
    @brief JSON view store over an async Redis client
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url
        self.client: Optional[redis.Redis] = None

    async def connect(self):
        """
        @brief Open the client and verify it with PING; leaves client unset on failure
        """
        url = self.url or config.REDIS_URL
        client = redis.from_url(url, encoding="utf-8", decode_responses=True)
        try:
            await client.ping()
        except Exception as e:
            logger.error(f"Redis unavailable at {url}, views will not be cached: {e}")
            return
        self.client = client
        logger.info(f"View cache connected to {url}")

    async def close(self):
        if self.client is not None:
            await self.client.close()
            self.client = None

    async def get(self, key: str) -> Optional[Any]:
        if self.client is None:
            return None
        try:
            raw = await self.client.get(key)
        except Exception as e:
            logger.warning(f"View cache read failed for {key}: {e}")
            return None
        return json.loads(raw) if raw else None

    async def set(self, key: str, view: Any, ttl: int):
        if self.client is None:
            return
        try:
            await self.client.setex(key, ttl, json.dumps(view))
        except Exception as e:
            logger.warning(f"View cache write failed for {key}: {e}")


cache = RedisCache()
