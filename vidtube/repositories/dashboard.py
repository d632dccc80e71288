from __future__ import annotations

"""
Channel statistics.

Three independent aggregates merged by `dashboard_service`:
video totals (with likes/comments), tweet totals (with likes) and the
subscriber count.
"""

from typing import Dict
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.models.comment import Comment
from vidtube.db.models.like import Like
from vidtube.db.models.tweet import Tweet
from vidtube.db.models.video import Video


async def video_stats(db: AsyncSession, owner_id: UUID) -> Dict[str, int]:
    """totalVideos / totalViews over the owner's videos, plus likes and comments on them."""
    likes_per_video = (
        select(Like.video_id.label("video_id"), func.count(Like.id).label("likes"))
        .where(Like.video_id.is_not(None))
        .group_by(Like.video_id)
        .subquery()
    )
    comments_per_video = (
        select(Comment.video_id.label("video_id"), func.count(Comment.id).label("comments"))
        .group_by(Comment.video_id)
        .subquery()
    )
    stmt = (
        select(
            func.count(Video.id),
            func.coalesce(func.sum(Video.views), 0),
            func.coalesce(func.sum(likes_per_video.c.likes), 0),
            func.coalesce(func.sum(comments_per_video.c.comments), 0),
        )
        .select_from(Video)
        .outerjoin(likes_per_video, likes_per_video.c.video_id == Video.id)
        .outerjoin(comments_per_video, comments_per_video.c.video_id == Video.id)
        .where(Video.owner_id == owner_id)
    )
    total_videos, total_views, total_likes, total_comments = (await db.execute(stmt)).one()
    return {
        "total_videos": int(total_videos or 0),
        "total_views": int(total_views or 0),
        "total_likes": int(total_likes or 0),
        "total_comments": int(total_comments or 0),
    }


async def tweet_stats(db: AsyncSession, owner_id: UUID) -> Dict[str, int]:
    likes_per_tweet = (
        select(Like.tweet_id.label("tweet_id"), func.count(Like.id).label("likes"))
        .where(Like.tweet_id.is_not(None))
        .group_by(Like.tweet_id)
        .subquery()
    )
    stmt = (
        select(
            func.count(Tweet.id),
            func.coalesce(func.sum(likes_per_tweet.c.likes), 0),
        )
        .select_from(Tweet)
        .outerjoin(likes_per_tweet, likes_per_tweet.c.tweet_id == Tweet.id)
        .where(Tweet.owner_id == owner_id)
    )
    total_tweets, total_likes = (await db.execute(stmt)).one()
    return {"total_tweets": int(total_tweets or 0), "total_likes": int(total_likes or 0)}
