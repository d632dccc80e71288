from __future__ import annotations

"""🐦 VidTube — Tweet (short text post on a channel)."""

from sqlalchemy import Column, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Tweet(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "tweets"

    content = Column(Text, nullable=False)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    owner = relationship("User", lazy="selectin")
