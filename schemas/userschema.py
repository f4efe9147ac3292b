from pydantic import Field

from models.base import Base
from constants import USERNAME_MIN_LENGTH, USER_PASSWORD_MIN_LENGTH


class UserCredsSchema(Base):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserRegisterSchema(UserCredsSchema):
    username: str = Field(min_length=USERNAME_MIN_LENGTH)
    password: str = Field(min_length=USER_PASSWORD_MIN_LENGTH)


class UserSchema(Base):
    id: str
    username: str


class IdentitySchema(Base):
    """Caller identity carried by a bearer token."""

    user_id: str
    username: str | None = None
