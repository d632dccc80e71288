from __future__ import annotations

"""
❤️ VidTube — Like (user → video | comment | tweet)
==================================================

Presence of a row means "liked". Exactly one target column is set.

Why this design?
----------------
• One table for all three targets keeps toggle and counting queries uniform.
• Per-target unique constraints make `(liked_by, target)` a set.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Like(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "likes"

    liked_by_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    video_id = Column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=True)
    comment_id = Column(Uuid, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True)
    tweet_id = Column(Uuid, ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="exactly_one_target",
        ),
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
        Index("ix_likes_video_id", "video_id"),
        Index("ix_likes_comment_id", "comment_id"),
        Index("ix_likes_tweet_id", "tweet_id"),
    )

    video = relationship("Video", lazy="raise")
    comment = relationship("Comment", lazy="raise")
    tweet = relationship("Tweet", lazy="raise")
