# vidtube/api/v1/routers/likes.py
from __future__ import annotations

"""
Likes API — VidTube

Toggles answer 201 "Liked" or 200 "Unliked", each with `{totalLikes}`.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.envelope import api_response
from vidtube.services import like_service
from vidtube.services.like_service import ToggleResult

router = APIRouter(prefix="/likes", tags=["Likes"])


def _toggle_response(result: ToggleResult) -> JSONResponse:
    return api_response(result.data, result.message, result.status_code)


@router.post("/toggle/v/{video_id}", summary="Like / unlike a video")
async def toggle_video_like(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    return _toggle_response(await like_service.toggle_video_like(db, current_user, video_id))


@router.post("/toggle/c/{comment_id}", summary="Like / unlike a comment")
async def toggle_comment_like(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    return _toggle_response(await like_service.toggle_comment_like(db, current_user, comment_id))


@router.post("/toggle/t/{tweet_id}", summary="Like / unlike a tweet")
async def toggle_tweet_like(
    tweet_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    return _toggle_response(await like_service.toggle_tweet_like(db, current_user, tweet_id))


@router.get("/videos", summary="Videos I liked")
async def liked_videos(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    return api_response(await like_service.get_liked_videos(db, current_user), "Liked videos")


@router.get("/comments", summary="Comments I liked")
async def liked_comments(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    return api_response(await like_service.get_liked_comments(db, current_user), "Liked comments")


@router.get("/tweets", summary="Tweets I liked")
async def liked_tweets(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    return api_response(await like_service.get_liked_tweets(db, current_user), "Liked tweets")


__all__ = ["router"]
