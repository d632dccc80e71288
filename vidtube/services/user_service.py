# vidtube/services/user_service.py
from __future__ import annotations

"""
User service — VidTube
======================

What this module provides
-------------------------
- **Register** (multipart: avatar required, cover image optional)
- **Login / logout / refresh** on top of `token_service`
- **Password change** (re-hash + end the session)
- **Profile / avatar / cover image** updates (old media removed best-effort)
- **Channel profile** with subscriber counts and `isSubscribed`
- **Watch history** (newest first)

Errors are raised as `ApiError` and rendered by the central handlers.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from fastapi import UploadFile, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.exceptions import ApiError
from vidtube.core.security import get_password_hash, verify_password
from vidtube.db.models.user import User
from vidtube.repositories import subscriptions as subscription_repo
from vidtube.repositories.videos import watch_history_videos
from vidtube.schemas.auth import LoginRequest
from vidtube.schemas.user import ChannelProfileOut, UserOut
from vidtube.schemas.video import VideoOut
from vidtube.services.media_service import MediaRelay
from vidtube.services.token_service import TokenPair, issue_tokens, revoke_tokens, rotate_tokens
from vidtube.utils.validation_utils import (
    clean,
    normalize_email,
    normalize_username,
    require_found,
)

logger = logging.getLogger("vidtube.users")


async def _find_by_username_or_email(
    db: AsyncSession, *, username: str, email: str
) -> Optional[User]:
    stmt = select(User).where(or_(User.username == username, User.email == email))
    return (await db.execute(stmt)).scalars().first()


# ─────────────────────────────────────────────────────────────
# 📝 Register
# ─────────────────────────────────────────────────────────────
async def register_user(
    db: AsyncSession,
    relay: MediaRelay,
    *,
    username: Optional[str],
    email: Optional[str],
    full_name: Optional[str],
    password: Optional[str],
    avatar: Optional[UploadFile],
    cover_image: Optional[UploadFile] = None,
) -> User:
    """
    Create an account.

    Steps
    -----
    1) All text fields present → else 400.
    2) Email syntax → else 400.
    3) Username/email free → else 409.
    4) Avatar present → else 400; upload avatar (+ optional cover).
    5) Persist with a bcrypt hash; username lower-cased, spaces removed.
    """
    # [Step 1] Required fields
    fields = [clean(username), clean(email), clean(full_name), password or ""]
    if any(not f.strip() for f in fields):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Please provide all the required fields")

    # [Step 2] Normalize
    norm_email = normalize_email(clean(email))
    norm_username = normalize_username(clean(username))

    # [Step 3] Uniqueness
    if await _find_by_username_or_email(db, username=norm_username, email=norm_email):
        raise ApiError(status.HTTP_409_CONFLICT, "User already exists")

    # [Step 4] Media
    if avatar is None or not avatar.filename:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Please provide an avatar image")
    avatar_media = await relay.store_upload(avatar)
    cover_url: Optional[str] = None
    if cover_image is not None and cover_image.filename:
        try:
            cover_url = (await relay.store_upload(cover_image)).url
        except ApiError:
            await relay.remove(avatar_media.url)
            raise

    # [Step 5] Persist
    user = User(
        username=norm_username,
        email=norm_email,
        full_name=clean(full_name),
        password=get_password_hash(password or ""),
        avatar=avatar_media.url,
        cover_image=cover_url,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        await relay.remove(avatar_media.url)
        await relay.remove(cover_url)
        raise ApiError(status.HTTP_409_CONFLICT, "User already exists")
    await db.refresh(user)
    logger.info("Registered user=%s", user.id)
    return user


# ─────────────────────────────────────────────────────────────
# 🔐 Login / logout / refresh
# ─────────────────────────────────────────────────────────────
async def login_user(db: AsyncSession, payload: LoginRequest) -> Tuple[User, TokenPair]:
    identifier = payload.identifier.lower()
    if not identifier or not payload.password:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Username or email and password are required")

    stmt = select(User).where(
        or_(User.username == normalize_username(identifier), User.email == identifier)
    )
    user = (await db.execute(stmt)).scalars().first()
    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User does not exist")
    if not verify_password(payload.password, user.password):
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid user credentials")

    pair = await issue_tokens(db, user)
    return user, pair


async def logout_user(db: AsyncSession, user: User) -> None:
    await revoke_tokens(db, user)


async def refresh_session(db: AsyncSession, presented: Optional[str]) -> Tuple[User, TokenPair]:
    return await rotate_tokens(db, clean(presented) or None)


# ─────────────────────────────────────────────────────────────
# 🔑 Password
# ─────────────────────────────────────────────────────────────
async def change_password(
    db: AsyncSession, user: User, *, old_password: Optional[str], new_password: Optional[str]
) -> None:
    """Verify the old password, store the new hash and end the session."""
    if not old_password or not new_password or not new_password.strip():
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Old and new passwords are required")
    if not verify_password(old_password, user.password):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid old password")

    user.password = get_password_hash(new_password)
    user.refresh_token = None
    await db.commit()
    logger.info("Password changed for user=%s", user.id)


# ─────────────────────────────────────────────────────────────
# 👤 Profile & media
# ─────────────────────────────────────────────────────────────
async def update_profile(
    db: AsyncSession, user: User, *, full_name: Optional[str], email: Optional[str]
) -> User:
    name = clean(full_name)
    raw_email = clean(email)
    if not name and not raw_email:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "At least one field is required to update the profile")

    if raw_email:
        new_email = normalize_email(raw_email)
        if new_email != user.email:
            taken = (
                await db.execute(select(User.id).where(User.email == new_email, User.id != user.id))
            ).first()
            if taken:
                raise ApiError(status.HTTP_409_CONFLICT, "Email is already in use")
            user.email = new_email
    if name:
        user.full_name = name

    await db.commit()
    await db.refresh(user)
    return user


async def _replace_image(
    db: AsyncSession, relay: MediaRelay, user: User, upload: Optional[UploadFile], *, attr: str, label: str
) -> User:
    if upload is None or not upload.filename:
        raise ApiError(status.HTTP_400_BAD_REQUEST, f"{label} file is required")
    stored = await relay.store_upload(upload)
    old_url = getattr(user, attr)
    setattr(user, attr, stored.url)
    await db.commit()
    await db.refresh(user)
    await relay.remove(old_url)
    return user


async def update_avatar(db: AsyncSession, relay: MediaRelay, user: User, upload: Optional[UploadFile]) -> User:
    return await _replace_image(db, relay, user, upload, attr="avatar", label="Avatar")


async def update_cover_image(db: AsyncSession, relay: MediaRelay, user: User, upload: Optional[UploadFile]) -> User:
    return await _replace_image(db, relay, user, upload, attr="cover_image", label="Cover image")


# ─────────────────────────────────────────────────────────────
# 📺 Channel profile & watch history
# ─────────────────────────────────────────────────────────────
async def get_channel_profile(db: AsyncSession, viewer: User, username: Optional[str]) -> ChannelProfileOut:
    name = normalize_username(clean(username))
    if not name:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Username is missing")
    channel = require_found(
        (await db.execute(select(User).where(func.lower(User.username) == name))).scalars().first(),
        "Channel does not exist",
    )
    subscribers = await subscription_repo.count_subscribers(db, channel.id)
    subscribed_to = await subscription_repo.count_subscriptions(db, channel.id)
    is_subscribed = await subscription_repo.find_subscription(db, viewer.id, channel.id) is not None

    base: Dict[str, Any] = UserOut.model_validate(channel).model_dump()
    return ChannelProfileOut(
        **base,
        subscribers_count=subscribers,
        channels_subscribed_to_count=subscribed_to,
        is_subscribed=is_subscribed,
    )


async def get_watch_history(db: AsyncSession, user: User) -> List[VideoOut]:
    videos = await watch_history_videos(db, user.id)
    return [VideoOut.model_validate(v) for v in videos]


__all__ = [
    "register_user",
    "login_user",
    "logout_user",
    "refresh_session",
    "change_password",
    "update_profile",
    "update_avatar",
    "update_cover_image",
    "get_channel_profile",
    "get_watch_history",
]
