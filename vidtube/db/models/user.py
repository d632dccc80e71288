from __future__ import annotations

"""
👤 VidTube — User (accounts, channel identity & session)
=======================================================

Account entity storing credentials, public channel fields and the single
active refresh token.

Design highlights
-----------------
• **Unique** `username` and `email`, both stored lower-cased.
• `refresh_token` holds the one live session; rotation is a compare-and-swap
  on this column (see `vidtube.services.token_service`).
• Watch history lives in `watch_history` rows (ordered, duplicates allowed).
"""

from sqlalchemy import CheckConstraint, Column, String, Text
from sqlalchemy.orm import relationship

from vidtube.db.base_class import Base, TimestampMixin, UUIDPKMixin


class User(UUIDPKMixin, TimestampMixin, Base):
    """Account record. `password` and `refresh_token` never leave the API."""

    __tablename__ = "users"

    # ── Identity ──────────────────────────────────────────────────────────────
    username = Column(String(64), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    full_name = Column(String(255), nullable=False, index=True)

    # ── Media ─────────────────────────────────────────────────────────────────
    avatar = Column(Text, nullable=False, doc="Public URL of the avatar image.")
    cover_image = Column(Text, nullable=True)

    # ── Auth ──────────────────────────────────────────────────────────────────
    password = Column(String(255), nullable=False, doc="bcrypt hash")
    refresh_token = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("length(username) > 0", name="username_not_blank"),
        CheckConstraint("length(email) > 0", name="email_not_blank"),
    )

    # ── Relationships ───────────────────────────────────────────────────────
    videos = relationship(
        "Video",
        back_populates="owner",
        passive_deletes=True,
        lazy="raise",
    )
    watch_history = relationship(
        "WatchHistoryEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
        order_by="WatchHistoryEntry.watched_at",
    )
