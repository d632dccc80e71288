from __future__ import annotations

"""🔔 VidTube — Subscription (subscriber → channel, both users)."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Subscription(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "subscriptions"

    subscriber_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    channel_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="no_self_subscription"),
    )

    subscriber = relationship("User", foreign_keys=[subscriber_id], lazy="raise")
    channel = relationship("User", foreign_keys=[channel_id], lazy="raise")
