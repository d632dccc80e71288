from __future__ import annotations

"""
Like service: toggle likes on videos, comments and tweets; list what a user liked.

Toggle semantics: a row present → delete ("Unliked", 200); absent → insert
("Liked", 201); both report the new total. A failed write surfaces as 500.
"""

from dataclasses import dataclass
from typing import Any, List
from uuid import UUID
import logging

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from vidtube.core.exceptions import ApiError
from vidtube.db.models.comment import Comment
from vidtube.db.models.like import Like
from vidtube.db.models.tweet import Tweet
from vidtube.db.models.user import User
from vidtube.db.models.video import Video
from vidtube.repositories import likes as like_repo
from vidtube.schemas.comment import CommentOut
from vidtube.schemas.dashboard import LikeToggleOut
from vidtube.schemas.tweet import TweetOut
from vidtube.schemas.video import VideoOut
from vidtube.services.video_service import NOT_PUBLISHED
from vidtube.utils.validation_utils import require_found

logger = logging.getLogger("vidtube.likes")


@dataclass(frozen=True)
class ToggleResult:
    liked: bool
    total_likes: int = 0

    @property
    def message(self) -> str:
        return "Liked" if self.liked else "Unliked"

    @property
    def status_code(self) -> int:
        return status.HTTP_201_CREATED if self.liked else status.HTTP_200_OK

    @property
    def data(self) -> LikeToggleOut:
        return LikeToggleOut(total_likes=self.total_likes)


async def _toggle(
    db: AsyncSession, user: User, column: InstrumentedAttribute, target_id: UUID
) -> ToggleResult:
    user_id = user.id
    existing = await like_repo.find_like(db, user_id, column, target_id)
    try:
        if existing is not None:
            await db.delete(existing)
            await db.commit()
        else:
            db.add(Like(liked_by_id=user_id, **{column.key: target_id}))
            await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Like toggle failed user=%s target=%s: %s", user_id, target_id, e)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update like") from e

    return ToggleResult(
        liked=existing is None,
        total_likes=await like_repo.count_likes(db, column, target_id),
    )


async def toggle_video_like(db: AsyncSession, user: User, video_id: UUID) -> ToggleResult:
    video = require_found(
        (await db.execute(select(Video).where(Video.id == video_id))).scalars().first(),
        "Video not found",
    )
    if not video.is_published:
        raise ApiError(status.HTTP_403_FORBIDDEN, NOT_PUBLISHED)
    return await _toggle(db, user, Like.video_id, video.id)


async def toggle_comment_like(db: AsyncSession, user: User, comment_id: UUID) -> ToggleResult:
    comment = require_found(
        (await db.execute(select(Comment).where(Comment.id == comment_id))).scalars().first(),
        "Comment not found",
    )
    return await _toggle(db, user, Like.comment_id, comment.id)


async def toggle_tweet_like(db: AsyncSession, user: User, tweet_id: UUID) -> ToggleResult:
    tweet = require_found(
        (await db.execute(select(Tweet).where(Tweet.id == tweet_id))).scalars().first(),
        "Tweet not found",
    )
    return await _toggle(db, user, Like.tweet_id, tweet.id)


def _non_empty(items: List[Any], message: str) -> List[Any]:
    if not items:
        raise ApiError(status.HTTP_404_NOT_FOUND, message)
    return items


async def get_liked_videos(db: AsyncSession, user: User) -> List[VideoOut]:
    rows = await like_repo.liked_videos(db, user.id)
    return _non_empty([VideoOut.model_validate(v) for v in rows], "No liked videos found")


async def get_liked_comments(db: AsyncSession, user: User) -> List[CommentOut]:
    rows = await like_repo.liked_comments(db, user.id)
    return _non_empty([CommentOut.model_validate(c) for c in rows], "No liked comments found")


async def get_liked_tweets(db: AsyncSession, user: User) -> List[TweetOut]:
    rows = await like_repo.liked_tweets(db, user.id)
    return _non_empty([TweetOut.model_validate(t) for t in rows], "No liked tweets found")
