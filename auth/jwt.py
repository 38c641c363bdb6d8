"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256:

    <b64url({"user_id", "email", "exp"})>.<hex signature>

Nothing is stored server-side; a token is valid while its signature matches
and ``exp`` lies in the future.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass
from typing import Optional

from utils.errors import UnauthorizedError


class InvalidTokenError(UnauthorizedError):
    default_message = "Invalid or expired token"


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    exp: int


def _sign(secret: str, raw: bytes) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: int,
    email: str,
    *,
    secret: str,
    ttl_seconds: int,
    now: Optional[float] = None,
) -> str:
    """Create a signed token carrying ``user_id``, ``email`` and expiry."""
    issued_at = time.time() if now is None else now
    payload = {
        "user_id": user_id,
        "email": email,
        "exp": int(issued_at) + ttl_seconds,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(secret, raw)


def verify_token(token: str, *, secret: str, now: Optional[float] = None) -> TokenClaims:
    """
    Verify token and return its claims.

    Raises ``InvalidTokenError`` (401) on malformed, tampered or expired tokens.
    """
    if not token:
        raise InvalidTokenError("Missing token")
    try:
        encoded, sig = token.split(".", 1)
        raw = urlsafe_b64decode(encoded.encode())
    except ValueError as exc:
        raise InvalidTokenError("Malformed token") from exc

    if not hmac.compare_digest(sig.encode(), _sign(secret, raw).encode()):
        raise InvalidTokenError("Invalid token signature")

    try:
        payload = json.loads(raw)
        claims = TokenClaims(
            user_id=int(payload["user_id"]),
            email=str(payload["email"]),
            exp=int(payload["exp"]),
        )
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidTokenError("Malformed token") from exc

    current = time.time() if now is None else now
    if claims.exp <= current:
        raise InvalidTokenError("Token expired")
    return claims
