import logging
from typing import Annotated

from fastapi import Depends, APIRouter

from auth import authentication, identity_required
from database import redisDep
from errors import NotFound, Unauthorized
from schemas.userschema import (
    IdentitySchema,
    UserCredsSchema,
    UserRegisterSchema,
    UserSchema,
)
from services.identity import IdentityStore
from utils import hash_password, verify_password

logger = logging.getLogger(__name__)

router_auth = APIRouter(prefix="/auth", tags=["Authentication"])


def get_identity_store(redis: redisDep) -> IdentityStore:
    return IdentityStore(redis)


identityStoreDep = Annotated[IdentityStore, Depends(get_identity_store)]


@router_auth.post(
    "/register",
    description="Accepts username and password. Returns user and bearer token if username is free, 409 otherwise",
    summary="Register user",
)
async def register(newUser: UserRegisterSchema, users: identityStoreDep):
    user = await users.create(newUser.username, hash_password(newUser.password))
    logger.info("Registered user %s", user.id)

    return {
        "success": True,
        "user": UserSchema(id=user.id, username=user.username).to_json(),
        "token": authentication.issue_token(user),
    }


@router_auth.post(
    "/login",
    description="Accepts creds object. Returns user and bearer token if creds valid, 401 otherwise",
    summary="Login user",
)
async def login(creds: UserCredsSchema, users: identityStoreDep):
    user = await users.find_by_username(creds.username)

    if user is None or not verify_password(creds.password, user.password_hash):
        raise Unauthorized("Wrong username or password")

    return {
        "success": True,
        "user": UserSchema(id=user.id, username=user.username).to_json(),
        "token": authentication.issue_token(user),
    }


@router_auth.get(
    "/me",
    description="Accepts bearer token. Returns the user it was issued for",
    summary="Current user",
)
async def me(
    users: identityStoreDep,
    identity: IdentitySchema = Depends(identity_required),
):
    user = await users.find_by_id(identity.user_id)

    if user is None:
        raise NotFound("User not found")

    return {"success": True, "user": UserSchema(id=user.id, username=user.username).to_json()}
