"""
Happy Thoughts API — User Service (registration, login, token lookup)
======================================================================

What:  Account operations behind /users and the auth gate.

Flows:
    register      unique username + email → hash password → new access token
    login         email + password → the token issued at registration
    authenticate  access token → User row (one SELECT per gated request)

Tokens are generated once, when the User row is built, and never rotated, so
login always returns the same token as registration did.
"""

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from happythoughts.exceptions import (
    AuthError,
    DatabaseError,
    DuplicateError,
    HappyThoughtsError,
)
from happythoughts.models.user import User
from happythoughts.schemas.user import CredentialsResponse, LoginRequest, RegisterRequest
from happythoughts.security import PasswordHasher, generate_access_token

logger = logging.getLogger(__name__)


class UserService:
    """
    Stateless apart from the password hasher; one instance per application.
    """

    def __init__(self, hasher: Optional[PasswordHasher] = None):
        self.hasher = hasher or PasswordHasher()

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> CredentialsResponse:
        """
        Create a user and issue its access token.

        Raises:
            DuplicateError:  username or email already taken (→ 400)
            ValidationError: empty password (→ 500)
            DatabaseError:   anything else (→ 500)
        """
        try:
            result = await db.execute(
                select(User).where(
                    or_(User.username == payload.username, User.email == payload.email)
                )
            )
            existing = result.scalars().first()
            if existing is not None:
                field = "email" if existing.email == payload.email else "username"
                raise DuplicateError(
                    message=f"A user with that {field} already exists",
                    field=field,
                )

            user = User(
                username=payload.username,
                email=payload.email,
                password_hash=self.hasher.hash(payload.password),
                access_token=generate_access_token(),
            )
            db.add(user)
            await db.flush()
        except HappyThoughtsError:
            raise
        except IntegrityError:
            # Lost a race with a concurrent registration for the same name/email
            raise DuplicateError()
        except Exception as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create user. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Registered user %s (%s)", user.id, user.username)
        return CredentialsResponse.model_validate(user)

    async def login(self, db: AsyncSession, payload: LoginRequest) -> CredentialsResponse:
        """Raises AuthError for an unknown email or a wrong password alike."""
        try:
            result = await db.execute(select(User).where(User.email == payload.email))
            user = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None or not self.hasher.verify(payload.password, user.password_hash):
            logger.info("Failed login attempt for %s", payload.email)
            raise AuthError(message="Invalid email or password")
        return CredentialsResponse.model_validate(user)

    async def authenticate(self, db: AsyncSession, token: str) -> User:
        """Resolve an access token to its user; the comparison is exact."""
        try:
            result = await db.execute(select(User).where(User.access_token == token))
            user = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error resolving access token: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None:
            raise AuthError(message="Access denied: invalid access token")
        return user
