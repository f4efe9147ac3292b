import logging

from authx import AuthX, AuthXConfig, TokenPayload
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import PyJWTError
from jwt import decode

from constants import JWT_SECRET_KEY, JWT_ALGORITHM, TOKEN_LIFETIME
from models.usermodel import UserModel
from schemas.userschema import IdentitySchema

logger = logging.getLogger(__name__)


class Authentication:

    def __init__(self):
        config = AuthXConfig()
        config.JWT_SECRET_KEY = JWT_SECRET_KEY
        config.JWT_TOKEN_LOCATION = ["headers"]
        config.JWT_ALGORITHM = JWT_ALGORITHM
        config.JWT_ACCESS_TOKEN_EXPIRES = TOKEN_LIFETIME

        self.config = config
        self.auth = AuthX(config)

    def issue_token(self, user: UserModel) -> str:
        return self.auth.create_access_token(
            uid=user.id, data={"username": user.username}
        )

    def decode_token(self, token: str) -> IdentitySchema | None:
        """Identity carried by *token*, or None when it is invalid or expired."""
        config = self.config

        try:
            payload: dict = decode(
                token, key=config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM]
            )
        except PyJWTError as e:
            logger.info("Ignoring bearer token: %s", e)
            return None

        if payload.get("type", "access") != "access" or not payload.get("sub"):
            return None

        return IdentitySchema(user_id=payload["sub"], username=payload.get("username"))


authentication = Authentication()
bearer = HTTPBearer(auto_error=False)


def identity_required(
    payload: TokenPayload = Depends(authentication.auth.access_token_required),
) -> IdentitySchema:
    return IdentitySchema(user_id=payload.sub, username=getattr(payload, "username", None))


def identity_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> IdentitySchema | None:
    if credentials is None:
        return None
    return authentication.decode_token(credentials.credentials)
