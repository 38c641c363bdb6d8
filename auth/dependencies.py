"""
FastAPI dependencies for authentication.

Provides ``get_settings`` and ``get_current_user``; the latter gates every
protected route and hands the verified identity to the handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.jwt import InvalidTokenError, verify_token
from config.settings import Settings
from utils.errors import UnauthorizedError

logger = logging.getLogger(__name__)

GATE_FAILURE_MESSAGE = "Invalid or missing authentication token"

# auto_error=False so a missing header is reported through our own envelope.
_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    user_id: int
    email: str


def get_settings(request: Request) -> Settings:
    """The ``Settings`` the running app was built with."""
    return request.app.state.settings


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """
    Extract and verify the Bearer token from the Authorization header.

    Raises ``UnauthorizedError`` before the handler runs when the header is
    missing, not a Bearer credential, or carries an invalid token.
    """
    if credentials is None:
        raise UnauthorizedError(GATE_FAILURE_MESSAGE)

    try:
        claims = verify_token(credentials.credentials, secret=settings.jwt_secret)
    except InvalidTokenError as exc:
        logger.debug("Rejected bearer token: %s", exc.message)
        raise UnauthorizedError(GATE_FAILURE_MESSAGE) from exc

    return CurrentUser(user_id=claims.user_id, email=claims.email)
