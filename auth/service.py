"""
Registration and login.

An email is either *absent* or *registered*.  ``register`` moves it from
absent to registered; ``login`` only reads.  Both return the public user
row plus a freshly issued token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import create_token
from auth.password import hash_password_async, verify_password_async
from config.settings import Settings
from database import helpers
from database.models import User
from utils.errors import ConflictError, UnauthorizedError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@dataclass
class AuthResult:
    user: User
    token: str


def issue_token_for(user: User, settings: Settings) -> str:
    return create_token(
        user.id,
        user.email,
        secret=settings.jwt_secret,
        ttl_seconds=settings.jwt_expiry_seconds,
    )


async def register(
    session: AsyncSession,
    email: str,
    password: str,
    settings: Settings,
) -> AuthResult:
    """Create a user for an unused email."""
    if await helpers.get_user_by_email(session, email) is not None:
        raise ConflictError(helpers.DUPLICATE_EMAIL_MESSAGE)

    password_hash = await hash_password_async(password)
    user = await helpers.create_user(session, email, password_hash)
    logger.info("Registered user %s", user.id)
    return AuthResult(user=user, token=issue_token_for(user, settings))


async def login(
    session: AsyncSession,
    email: str,
    password: str,
    settings: Settings,
) -> AuthResult:
    """
    Check credentials.

    Unknown email and wrong password fail with the same message so callers
    cannot tell which emails are registered.
    """
    user = await helpers.get_user_by_email(session, email)
    if user is None:
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    if not await verify_password_async(password, user.password_hash):
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    logger.info("Login: user %s", user.id)
    return AuthResult(user=user, token=issue_token_for(user, settings))
