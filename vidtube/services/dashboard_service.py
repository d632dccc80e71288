from __future__ import annotations

"""Dashboard service: channel statistics and the owner's full video list."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.models.user import User
from vidtube.repositories import dashboard as dashboard_repo
from vidtube.repositories import subscriptions as subscription_repo
from vidtube.repositories.videos import channel_videos
from vidtube.schemas.common import OwnerOut
from vidtube.schemas.dashboard import ChannelStatsOut, TweetStats, VideoStats
from vidtube.schemas.video import VideoOut


async def get_channel_stats(db: AsyncSession, user: User) -> ChannelStatsOut:
    videos = await dashboard_repo.video_stats(db, user.id)
    tweets = await dashboard_repo.tweet_stats(db, user.id)
    subscribers = await subscription_repo.count_subscribers(db, user.id)
    return ChannelStatsOut(
        user=OwnerOut.model_validate(user),
        video_stats=VideoStats(**videos),
        tweet_stats=TweetStats(**tweets),
        total_subscribers=subscribers,
    )


async def get_channel_videos(db: AsyncSession, user: User) -> List[VideoOut]:
    """Every video the caller owns, published or not, newest first."""
    return [VideoOut.model_validate(v) for v in await channel_videos(db, user.id)]
