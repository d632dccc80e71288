from __future__ import annotations

"""Like lookups, counts and the "things I liked" lists."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from vidtube.db.models.comment import Comment
from vidtube.db.models.like import Like
from vidtube.db.models.tweet import Tweet
from vidtube.db.models.video import Video


async def find_like(
    db: AsyncSession, user_id: UUID, column: InstrumentedAttribute, target_id: UUID
) -> Optional[Like]:
    stmt = select(Like).where(Like.liked_by_id == user_id, column == target_id)
    return (await db.execute(stmt)).scalars().first()


async def count_likes(db: AsyncSession, column: InstrumentedAttribute, target_id: UUID) -> int:
    stmt = select(func.count()).select_from(Like).where(column == target_id)
    return int((await db.execute(stmt)).scalar_one())


async def liked_videos(db: AsyncSession, user_id: UUID) -> Sequence[Video]:
    stmt = (
        select(Video)
        .join(Like, Like.video_id == Video.id)
        .where(Like.liked_by_id == user_id)
        .order_by(desc(Like.created_at))
    )
    return (await db.execute(stmt)).scalars().all()


async def liked_comments(db: AsyncSession, user_id: UUID) -> Sequence[Comment]:
    stmt = (
        select(Comment)
        .join(Like, Like.comment_id == Comment.id)
        .where(Like.liked_by_id == user_id)
        .order_by(desc(Like.created_at))
    )
    return (await db.execute(stmt)).scalars().all()


async def liked_tweets(db: AsyncSession, user_id: UUID) -> Sequence[Tweet]:
    stmt = (
        select(Tweet)
        .join(Like, Like.tweet_id == Tweet.id)
        .where(Like.liked_by_id == user_id)
        .order_by(desc(Like.created_at))
    )
    return (await db.execute(stmt)).scalars().all()
