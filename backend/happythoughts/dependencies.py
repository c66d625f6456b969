"""
Happy Thoughts API — Request Dependencies and Auth Gate
========================================================

What:  FastAPI dependencies that hand route handlers the objects built by
       create_app() (settings, services) and resolve the caller's identity.

Auth Gate:
    get_current_user   requires a valid access token. Reads the Authorization
                       header ("Bearer <token>" or the bare token), looks the
                       token up in the users table and stores the user on
                       request.state.user. A missing or unknown token raises
                       AuthError (401) before the route handler runs.
    get_optional_user  for create endpoints: no header → anonymous (None),
                       unless REQUIRE_AUTH_FOR_CREATE is on. A header that is
                       present is always checked.

There is no session state, expiry or refresh: each gated request costs one
SELECT against users.
"""

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from happythoughts.config import Settings
from happythoughts.database import get_db_session
from happythoughts.exceptions import AuthError
from happythoughts.models.user import User
from happythoughts.services.dog_service import DogService
from happythoughts.services.thought_service import ThoughtService
from happythoughts.services.user_service import UserService

BEARER_SCHEME = "bearer"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_thought_service(request: Request) -> ThoughtService:
    return request.app.state.thought_service


def get_dog_service(request: Request) -> DogService:
    return request.app.state.dog_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header value.

    "Bearer abc" → "abc", "abc" → "abc", "Bearer" / "" / None → None. Only the scheme
    word is case-insensitive; the token itself is returned untouched.
    """
    if authorization is None:
        return None
    parts = authorization.split(None, 1)
    if not parts:
        return None
    if parts[0].lower() == BEARER_SCHEME:
        return parts[1].strip() if len(parts) == 2 else None
    return authorization.strip()


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> User:
    token = extract_token(authorization)
    if token is None:
        raise AuthError(message="Access denied: missing access token")
    user = await users.authenticate(db, token)
    request.state.user = user
    return user


async def get_optional_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    if authorization is None and not settings.require_auth_for_create:
        request.state.user = None
        return None
    return await get_current_user(request, authorization, db, users)
