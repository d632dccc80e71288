# vidtube/core/jwt.py
from __future__ import annotations

"""
VidTube — JWT helpers
=====================
- `decode_token` verifies signature/expiry with the secret for the token type
- Token extraction from the `accessToken` cookie or an `Authorization: Bearer` header

Notes
-----
- Token *creation* lives in `vidtube.core.security`.
- Access and refresh tokens are signed with different secrets, so a refresh
  token can never pass as an access token (and vice versa).
"""

from typing import Any, Dict, Literal, Optional
import logging

from fastapi import Request
from jose import ExpiredSignatureError, JWTError, jwt

from vidtube.core.config import settings
from vidtube.core.exceptions import InvalidTokenException

logger = logging.getLogger("vidtube.auth")

TokenType = Literal["access", "refresh"]

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def secret_for(token_type: TokenType) -> str:
    if token_type == "access":
        return settings.ACCESS_TOKEN_SECRET.get_secret_value()
    return settings.REFRESH_TOKEN_SECRET.get_secret_value()


# ─────────────────────────────────────────────────────────────
# 🔓 Decode
# ─────────────────────────────────────────────────────────────
def decode_token(token: str, *, expected_type: TokenType) -> Dict[str, Any]:
    """Decode and validate a JWT of `expected_type`.

    Security checks
    ---------------
    1) Signature and standard claims (exp/nbf/iat)
    2) `sub` and `jti` present
    3) `token_type` matches

    Raises
    ------
    InvalidTokenException (401)
    """
    try:
        payload = jwt.decode(token, secret_for(expected_type), algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Token expired (%s).", expected_type)
        raise InvalidTokenException(f"{expected_type.capitalize()} token has expired")
    except JWTError as e:
        logger.warning("JWT decoding failed: %s", e)
        raise InvalidTokenException(f"Invalid {expected_type} token")

    if not payload.get("sub"):
        raise InvalidTokenException("Token missing user ID")
    if not payload.get("jti"):
        raise InvalidTokenException("Token missing JTI")
    if payload.get("token_type") != expected_type:
        logger.warning("Token type mismatch: got %r, expected %r", payload.get("token_type"), expected_type)
        raise InvalidTokenException("Invalid token type")

    return payload


# ─────────────────────────────────────────────────────────────
# 📥 Extract
# ─────────────────────────────────────────────────────────────
def _bearer_from_header(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def get_bearer_token(request: Request) -> str:
    """Access token from the `accessToken` cookie, else the Authorization header."""
    token = (request.cookies.get(ACCESS_COOKIE) or "").strip() or _bearer_from_header(request)
    if not token:
        raise InvalidTokenException("Access token is required")
    return token


__all__ = [
    "ACCESS_COOKIE",
    "REFRESH_COOKIE",
    "decode_token",
    "get_bearer_token",
    "secret_for",
]
