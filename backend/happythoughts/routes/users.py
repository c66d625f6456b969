"""
Happy Thoughts API — User Account Routes
=========================================

Routes:
    POST /users/register   201 {id, username, access_token}; 400 if taken
    POST /users/login      200 {id, username, access_token}; 401 if wrong
    GET  /users/me         200 {id, username, email}; 401 without a valid token

Clients send the returned access_token in the Authorization header
("Bearer <token>" or the bare token) on gated requests.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from happythoughts.database import get_db_session
from happythoughts.dependencies import get_current_user, get_user_service
from happythoughts.models.user import User
from happythoughts.schemas.common import Envelope, ErrorResponse
from happythoughts.schemas.user import (
    CredentialsResponse,
    LoginRequest,
    RegisterRequest,
    UserProfile,
)
from happythoughts.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

UNAUTHORIZED = {401: {"description": "Missing or invalid credentials", "model": ErrorResponse}}


@router.post(
    "/register",
    status_code=201,
    response_model=Envelope[CredentialsResponse],
    responses={
        400: {"description": "Username or email already registered", "model": ErrorResponse},
        500: {"description": "Validation or database error", "model": ErrorResponse},
    },
    summary="Create an account and receive an access token",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> Envelope[CredentialsResponse]:
    credentials = await users.register(db, payload)
    return Envelope(response=credentials, message="User created")


@router.post(
    "/login",
    response_model=Envelope[CredentialsResponse],
    responses=UNAUTHORIZED,
    summary="Exchange email and password for the account's access token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> Envelope[CredentialsResponse]:
    credentials = await users.login(db, payload)
    return Envelope(response=credentials, message="Logged in")


@router.get(
    "/me",
    response_model=Envelope[UserProfile],
    responses=UNAUTHORIZED,
    summary="Profile of the user owning the access token",
)
async def me(user: User = Depends(get_current_user)) -> Envelope[UserProfile]:
    return Envelope(response=UserProfile.model_validate(user), message="Authenticated")
