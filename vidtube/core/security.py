# vidtube/core/security.py
from __future__ import annotations

"""
VidTube — Authentication & Security Helpers
===========================================
- Password hashing (passlib/bcrypt)
- JWT creation for access + refresh tokens (separate secrets)
- `get_current_user`: the Auth Gate dependency

Decoding lives in `vidtube.core.jwt`; session persistence in
`vidtube.services.token_service`.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4
import logging

from fastapi import Depends, Request
from jose import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.config import settings
from vidtube.core.exceptions import InvalidTokenException
from vidtube.core.jwt import decode_token, get_bearer_token, secret_for
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db

# ───────────────────────────────────────────────
# 🔐 Setup
# ───────────────────────────────────────────────
ALGORITHM: str = settings.JWT_ALGORITHM

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = logging.getLogger("vidtube.security")


# ───────────────────────────────────────────────
# 🔐 Password Hashing
# ───────────────────────────────────────────────
def get_password_hash(password: str) -> str:
    """Return a salted bcrypt hash."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time verify of a plaintext password against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


# ───────────────────────────────────────────────
# 🪪 JWT: Access Token
# ───────────────────────────────────────────────
def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Signed access token carrying the public identity claims."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload: Dict[str, Any] = {
        "sub": str(user.id),
        "username": user.username,
        "email": user.email,
        "fullName": user.full_name,
        "exp": expire,
        "iat": now,
        "nbf": now,
        "jti": str(uuid4()),
        "token_type": "access",
    }
    return jwt.encode(payload, secret_for("access"), algorithm=ALGORITHM)


# ───────────────────────────────────────────────
# 🎟️ JWT: Refresh Token
# ───────────────────────────────────────────────
def create_refresh_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Signed refresh token; only the subject is embedded."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
        "nbf": now,
        "jti": str(uuid4()),
        "token_type": "refresh",
    }
    return jwt.encode(payload, secret_for("refresh"), algorithm=ALGORITHM)


def get_user_id_from_payload(payload: Dict[str, Any]) -> UUID:
    """`sub` as a UUID; 401 if malformed."""
    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        raise InvalidTokenException("Invalid token: malformed user id")


# ───────────────────────────────────────────────
# 👤 Dependency: Get Current User
# ───────────────────────────────────────────────
async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
) -> User:
    """Authenticate the caller from the presented **access** token.

    Steps:
    1) Read the token (cookie first, then Bearer header).
    2) Decode & validate via `vidtube.core.jwt`.
    3) Load the user; attach it to `request.state.user`.
    """
    token = get_bearer_token(request)
    payload = decode_token(token, expected_type="access")
    user_id = get_user_id_from_payload(payload)

    user = (await db.execute(select(User).where(User.id == user_id))).scalars().first()
    if user is None:
        raise InvalidTokenException("Invalid access token")

    request.state.user = user
    request.state.user_id = user.id
    logger.debug("[Auth] Authenticated user=%s", user.id)
    return user


__all__ = [
    "pwd_context",
    "get_password_hash",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "get_user_id_from_payload",
    "get_current_user",
]
