from vidtube.db.models.user import User
from vidtube.db.models.video import Video
from vidtube.db.models.comment import Comment
from vidtube.db.models.tweet import Tweet
from vidtube.db.models.like import Like
from vidtube.db.models.subscription import Subscription
from vidtube.db.models.playlist import Playlist, PlaylistVideo
from vidtube.db.models.watch_history import WatchHistoryEntry

__all__ = [
    "User",
    "Video",
    "Comment",
    "Tweet",
    "Like",
    "Subscription",
    "Playlist",
    "PlaylistVideo",
    "WatchHistoryEntry",
]
