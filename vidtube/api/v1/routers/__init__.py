"""
🧭 VidTube • API v1 Router Aggregator
=====================================

Exports the combined `router` and a `build_v1_router()` factory.

    from vidtube.api.v1.routers import router as v1_router
    app.include_router(v1_router, prefix="/api/v1")

Auth lives in the child routers (`Depends(get_current_user)`); the health
check is public.
"""

from fastapi import APIRouter

from .comments import router as comments_router
from .dashboard import router as dashboard_router
from .healthcheck import router as healthcheck_router
from .likes import router as likes_router
from .playlists import router as playlists_router
from .subscriptions import router as subscriptions_router
from .tweets import router as tweets_router
from .users import router as users_router
from .videos import router as videos_router


def build_v1_router() -> APIRouter:
    """Compose the API v1 surface into a single `APIRouter`."""
    r = APIRouter()

    r.include_router(healthcheck_router)
    r.include_router(users_router)
    r.include_router(videos_router)
    r.include_router(comments_router)
    r.include_router(likes_router)
    r.include_router(subscriptions_router)
    r.include_router(playlists_router)
    r.include_router(tweets_router)
    r.include_router(dashboard_router)

    return r


router = build_v1_router()

__all__ = [
    "build_v1_router",
    "router",
    "comments_router",
    "dashboard_router",
    "healthcheck_router",
    "likes_router",
    "playlists_router",
    "subscriptions_router",
    "tweets_router",
    "users_router",
    "videos_router",
]
