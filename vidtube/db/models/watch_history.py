from __future__ import annotations

"""
👀 VidTube — WatchHistoryEntry
==============================

One row per view event. Duplicates are expected: distinct-viewer counting
collapses them by `(video_id, user_id)`.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, UUIDPKMixin, utcnow


class WatchHistoryEntry(UUIDPKMixin, Base):
    __tablename__ = "watch_history"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    video_id = Column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    watched_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_watch_history_user_watched", "user_id", "watched_at"),
    )

    user = relationship("User", back_populates="watch_history", lazy="raise")
    video = relationship("Video", lazy="raise")
