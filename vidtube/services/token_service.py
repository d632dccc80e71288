# vidtube/services/token_service.py
from __future__ import annotations

"""
VidTube — Session / Token Service
=================================
- One active session per user: `users.refresh_token` holds the SHA-256 digest
  of the current refresh token (no raw tokens at rest).
- `issue_tokens` overwrites the digest (login).
- `rotate_tokens` is a compare-and-swap on the digest; a token that is validly
  signed but no longer current is rejected with 401.
- `revoke_tokens` clears the digest (logout / password change).
"""

from dataclasses import dataclass
import hashlib
import logging
from typing import Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from vidtube.core.exceptions import InvalidTokenException
from vidtube.core.jwt import decode_token
from vidtube.core.security import (
    create_access_token,
    create_refresh_token,
    get_user_id_from_payload,
)
from vidtube.db.models.user import User

logger = logging.getLogger("vidtube.auth.token")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


# ──────────────────────────────────────────────────────────────────────────────
# 🔐 Issue
# ──────────────────────────────────────────────────────────────────────────────
async def issue_tokens(db: AsyncSession, user: User) -> TokenPair:
    """Mint a fresh pair and make its refresh token the user's only session."""
    pair = TokenPair(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user.id),
    )
    user.refresh_token = token_digest(pair.refresh_token)
    await db.commit()
    logger.info("Issued session for user=%s", user.id)
    return pair


# ──────────────────────────────────────────────────────────────────────────────
# 🔁 Rotate (compare-and-swap)
# ──────────────────────────────────────────────────────────────────────────────
async def rotate_tokens(db: AsyncSession, presented: Optional[str]) -> Tuple[User, TokenPair]:
    """
    Exchange a current refresh token for a new pair.

    Steps
    -----
    1) Verify signature, expiry and `token_type == "refresh"`.
    2) Load the user.
    3) UPDATE ... WHERE refresh_token = digest(presented); exactly one row must match.
    """
    if not presented:
        raise InvalidTokenException("Refresh token is required")

    payload = decode_token(presented, expected_type="refresh")
    user_id = get_user_id_from_payload(payload)

    user = (await db.execute(select(User).where(User.id == user_id))).scalars().first()
    if user is None:
        raise InvalidTokenException("Invalid refresh token")

    pair = TokenPair(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user.id),
    )
    result = await db.execute(
        update(User)
        .where(User.id == user.id, User.refresh_token == token_digest(presented))
        .values(refresh_token=token_digest(pair.refresh_token))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.rollback()
        logger.warning("Refresh token reuse or stale session for user=%s", user.id)
        raise InvalidTokenException("Refresh token is expired or used")

    await db.commit()
    set_committed_value(user, "refresh_token", token_digest(pair.refresh_token))
    return user, pair


# ──────────────────────────────────────────────────────────────────────────────
# 🚫 Revoke
# ──────────────────────────────────────────────────────────────────────────────
async def revoke_tokens(db: AsyncSession, user: User) -> None:
    """Clear the stored session so every outstanding refresh token is dead."""
    user.refresh_token = None
    await db.commit()
    logger.info("Revoked session for user=%s", user.id)


__all__ = ["TokenPair", "issue_tokens", "rotate_tokens", "revoke_tokens", "token_digest"]
