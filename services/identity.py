"""Identity store: users keyed by id, with a username uniqueness index."""

import logging

from redis.asyncio.client import Redis
from redis.exceptions import RedisError

from errors import Conflict
from database import user_key, username_key
from models.usermodel import UserModel
from utils import generate_id, utcnow

logger = logging.getLogger(__name__)


class IdentityStore:
    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    async def find_by_id(self, user_id: str) -> UserModel | None:
        data = await self.redis.get(user_key(user_id))
        if not data:
            return None
        return UserModel.model_validate_json(data)

    async def find_by_username(self, username: str) -> UserModel | None:
        user_id = await self.redis.get(username_key(username))
        if not user_id:
            return None
        return await self.find_by_id(user_id)

    async def create(self, username: str, password_hash: str) -> UserModel:
        """Register *username*; raise Conflict if it is already taken.

        The username index key is claimed with SET NX first, so two concurrent
        registrations of the same name cannot both succeed.
        """
        now = utcnow()
        user = UserModel(
            id=generate_id(),
            username=username,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

        claimed = await self.redis.set(username_key(username), user.id, nx=True)
        if not claimed:
            raise Conflict("Username already exists")

        try:
            await self.redis.set(user_key(user.id), user.model_dump_json(by_alias=True))
        except RedisError:
            logger.error("Releasing username claim for %s after failed write", username)
            await self.redis.delete(username_key(username))
            raise

        return user
