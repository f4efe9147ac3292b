import logging
from typing import Annotated

from fastapi import Depends
from redis.asyncio.client import Redis
from redis.exceptions import RedisError

from constants import REDIS_URL, HOST_REDIS, PORT_REDIS

logger = logging.getLogger(__name__)


# Key layout shared by every store
def user_key(user_id: str) -> str:
    return f"user:{user_id}"


def username_key(username: str) -> str:
    return f"user:username:{username}"


def user_notes_key(user_id: str) -> str:
    return f"user:{user_id}:notes"


def note_key(note_id: str) -> str:
    return f"note:{note_id}"


def short_key(short_url: str) -> str:
    return f"short:{short_url}"


NOTES_INDEX_KEY = "notes:index"


class RedisDB:

    def __init__(self, url: str | None = REDIS_URL) -> None:
        if url is not None:
            self.redis = Redis.from_url(url, decode_responses=True)
        else:
            self.redis = Redis(host=HOST_REDIS, port=PORT_REDIS, decode_responses=True)

    def get_redis(self) -> Redis:
        return self.redis

    async def is_alive(self, redis: Redis | None = None) -> bool:
        redis = redis or self.redis
        try:
            return bool(await redis.ping())
        except RedisError as e:
            logger.error("Redis health check failed: %s", e)
            return False

    async def close(self) -> None:
        await self.redis.aclose()


rd = RedisDB()
redisDep = Annotated[Redis, Depends(rd.get_redis)]
