from __future__ import annotations

"""
🎬 VidTube — Video
==================

A published (or draft) upload owned by a user.

Notes
-----
• `tags` is a JSON list of strings; search matches it case-insensitively.
• `views` is the distinct-viewer count, recomputed from watch history on
  every view event (never incremented).
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Video(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "videos"

    # ── Media ─────────────────────────────────────────────────────────────────
    video_file = Column(Text, nullable=False)
    thumbnail = Column(Text, nullable=False)
    duration = Column(Float, nullable=True, doc="Seconds, probed at upload.")

    # ── Metadata ──────────────────────────────────────────────────────────────
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)

    # ── Stats / state ─────────────────────────────────────────────────────────
    views = Column(Integer, nullable=False, default=0, server_default=text("0"))
    is_published = Column(Boolean, nullable=False, default=True, server_default=text("true"))

    owner_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("views >= 0", name="views_non_negative"),
        Index("ix_videos_published_created", "is_published", "created_at"),
    )

    owner = relationship("User", back_populates="videos", lazy="selectin")
