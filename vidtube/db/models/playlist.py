from __future__ import annotations

"""
📃 VidTube — Playlist & PlaylistVideo
=====================================

A named, ordered set of videos owned by a user.

• Composite PK `(playlist_id, video_id)` on the association → no duplicates.
• `position` preserves insertion order.
• `(owner_id, name)` is unique.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Playlist(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "playlists"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_playlists_owner_name"),
    )

    owner = relationship("User", lazy="selectin")


class PlaylistVideo(Base):
    __tablename__ = "playlist_videos"

    playlist_id = Column(Uuid, ForeignKey("playlists.id", ondelete="CASCADE"), primary_key=True)
    video_id = Column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True, index=True)
    position = Column(Integer, nullable=False, default=0)
