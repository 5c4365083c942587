import logging
from typing import Optional
from redis.asyncio import Redis
from event_quotes.core.config import settings

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis() -> Redis:
    global redis
    try:
        client = Redis.from_url(settings.REDIS_URL, decode_responses=False)
        await client.ping()
        redis = client
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise

async def close_redis():
    global redis
    if redis:
        await redis.aclose()
        redis = None

def get_redis() -> Optional[Redis]:
    """Shared client, or None when Redis is not connected.

    Callers treat Redis as optional and skip caching, idempotency and rate
    limiting without it.
    """
    return redis
