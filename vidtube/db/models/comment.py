from __future__ import annotations

"""💬 VidTube — Comment on a video."""

from sqlalchemy import Column, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Comment(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "comments"

    content = Column(Text, nullable=False)
    video_id = Column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        Index("ix_comments_video_created", "video_id", "created_at"),
    )

    owner = relationship("User", lazy="selectin")
