# vidtube/api/v1/routers/users.py
from __future__ import annotations

"""
Users API — VidTube
===================

Endpoints
---------
POST  /users/register             multipart sign-up (avatar required)
POST  /users/login                username-or-email + password → tokens + cookies
POST  /users/logout               clear the session and both cookies
POST  /users/refresh-token        rotate the refresh token (cookie or body)
PATCH /users/change-password      verify old password, store the new one
GET   /users/my-profile
PATCH /users/update-profile       full name and/or email
PATCH /users/update-avatar        multipart
PATCH /users/update-cover-image   multipart
GET   /users/channel/{username}   public channel profile + subscription counts
GET   /users/watch-history

Security
--------
- Token-bearing responses are marked **no-store**.
- Cookies are http-only; `secure` / `SameSite` come from settings.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.config import settings
from vidtube.core.jwt import ACCESS_COOKIE, REFRESH_COOKIE
from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.auth import AuthTokensOut, LoginOut, LoginRequest, RefreshRequest
from vidtube.schemas.envelope import api_response
from vidtube.schemas.user import ChangePasswordRequest, UpdateProfileRequest, UserOut
from vidtube.security_headers import set_sensitive_cache
from vidtube.services import user_service
from vidtube.services.media_service import MediaRelay, get_media_relay
from vidtube.services.token_service import TokenPair

router = APIRouter(prefix="/users", tags=["Users"])


# ─────────────────────────────────────────────────────────────
# 🍪 Cookie helpers
# ─────────────────────────────────────────────────────────────
def _cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": settings.COOKIE_SECURE,
        "samesite": settings.COOKIE_SAMESITE,
        "path": "/",
    }


def _set_auth_cookies(response: JSONResponse, pair: TokenPair) -> None:
    opts = _cookie_options()
    response.set_cookie(
        ACCESS_COOKIE,
        pair.access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **opts,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        pair.refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        **opts,
    )
    set_sensitive_cache(response)


def _clear_auth_cookies(response: JSONResponse) -> None:
    opts = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **opts)
    response.delete_cookie(REFRESH_COOKIE, **opts)


# ─────────────────────────────────────────────────────────────
# 📝 Register
# ─────────────────────────────────────────────────────────────
@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register a new user")
async def register(
    username: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    full_name: Optional[str] = Form(None, alias="fullName"),
    password: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    db: AsyncSession = Depends(get_async_db),
    relay: MediaRelay = Depends(get_media_relay),
) -> JSONResponse:
    user = await user_service.register_user(
        db,
        relay,
        username=username,
        email=email,
        full_name=full_name,
        password=password,
        avatar=avatar,
        cover_image=cover_image,
    )
    return api_response(UserOut.model_validate(user), "User Registered Successfully", status.HTTP_201_CREATED)


# ─────────────────────────────────────────────────────────────
# 🔐 Session
# ─────────────────────────────────────────────────────────────
@router.post("/login", summary="Log in with username or email")
async def login(
    payload: LoginRequest = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    """Verify credentials, issue a fresh token pair and set both cookies."""
    user, pair = await user_service.login_user(db, payload)
    body = LoginOut(
        user=UserOut.model_validate(user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )
    response = api_response(body, "User logged in successfully")
    _set_auth_cookies(response, pair)
    return response


@router.post("/logout", summary="Log out")
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    await user_service.logout_user(db, current_user)
    response = api_response({}, "User logged out successfully")
    _clear_auth_cookies(response)
    return response


@router.post("/refresh-token", summary="Rotate the refresh token")
async def refresh_token(
    request: Request,
    payload: Optional[RefreshRequest] = Body(None),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    """The `refreshToken` cookie wins over the body field."""
    presented = request.cookies.get(REFRESH_COOKIE) or (payload.refresh_token if payload else None)
    _user, pair = await user_service.refresh_session(db, presented)
    body = AuthTokensOut(access_token=pair.access_token, refresh_token=pair.refresh_token)
    response = api_response(body, "Access token refreshed successfully")
    _set_auth_cookies(response, pair)
    return response


# ─────────────────────────────────────────────────────────────
# 👤 Account
# ─────────────────────────────────────────────────────────────
@router.patch("/change-password", summary="Change password")
async def change_password(
    payload: ChangePasswordRequest = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    await user_service.change_password(
        db,
        current_user,
        old_password=payload.old_password,
        new_password=payload.new_password,
    )
    response = api_response({}, "Password changed successfully")
    _clear_auth_cookies(response)
    return response


@router.get("/my-profile", summary="Current user")
async def my_profile(current_user: User = Depends(get_current_user)) -> JSONResponse:
    return api_response(UserOut.model_validate(current_user), "User profile fetched successfully")


@router.patch("/update-profile", summary="Update full name and/or email")
async def update_profile(
    payload: UpdateProfileRequest = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    user = await user_service.update_profile(
        db, current_user, full_name=payload.full_name, email=payload.email
    )
    return api_response(UserOut.model_validate(user), "Profile updated successfully")


@router.patch("/update-avatar", summary="Replace the avatar image")
async def update_avatar(
    avatar: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
    relay: MediaRelay = Depends(get_media_relay),
) -> JSONResponse:
    user = await user_service.update_avatar(db, relay, current_user, avatar)
    return api_response(UserOut.model_validate(user), "Avatar updated successfully")


@router.patch("/update-cover-image", summary="Replace the cover image")
async def update_cover_image(
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
    relay: MediaRelay = Depends(get_media_relay),
) -> JSONResponse:
    user = await user_service.update_cover_image(db, relay, current_user, cover_image)
    return api_response(UserOut.model_validate(user), "Cover image updated successfully")


# ─────────────────────────────────────────────────────────────
# 📺 Channel & history
# ─────────────────────────────────────────────────────────────
@router.get("/channel/{username}", summary="Channel profile")
async def channel_profile(
    username: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    profile = await user_service.get_channel_profile(db, current_user, username)
    return api_response(profile, "Channel profile fetched successfully")


@router.get("/watch-history", summary="Watched videos, newest first")
async def watch_history(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    videos = await user_service.get_watch_history(db, current_user)
    return api_response(videos, "Watch history fetched successfully")


__all__ = ["router"]
