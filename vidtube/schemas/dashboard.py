from __future__ import annotations

from vidtube.schemas.common import CamelModel, OwnerOut


class VideoStats(CamelModel):
    total_videos: int = 0
    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0


class TweetStats(CamelModel):
    total_tweets: int = 0
    total_likes: int = 0


class ChannelStatsOut(CamelModel):
    user: OwnerOut
    video_stats: VideoStats
    tweet_stats: TweetStats
    total_subscribers: int = 0


class LikeToggleOut(CamelModel):
    total_likes: int = 0
