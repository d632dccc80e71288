from __future__ import annotations

"""Subscription read queries (subscriber lists, channel counts)."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.models.subscription import Subscription
from vidtube.db.models.user import User


def _public(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "full_name": user.full_name,
        "avatar": user.avatar,
    }


async def subscribers_of(db: AsyncSession, channel_id: UUID) -> List[Dict[str, Any]]:
    """Channel's subscribers, newest first, each with a public user projection."""
    stmt = (
        select(Subscription, User)
        .join(User, User.id == Subscription.subscriber_id)
        .where(Subscription.channel_id == channel_id)
        .order_by(desc(Subscription.created_at))
    )
    rows = (await db.execute(stmt)).all()
    return [
        {"id": sub.id, "subscriber": _public(user), "created_at": sub.created_at}
        for sub, user in rows
    ]


async def subscriptions_of(db: AsyncSession, subscriber_id: UUID) -> List[Dict[str, Any]]:
    """Channels a user subscribes to, newest first."""
    stmt = (
        select(Subscription, User)
        .join(User, User.id == Subscription.channel_id)
        .where(Subscription.subscriber_id == subscriber_id)
        .order_by(desc(Subscription.created_at))
    )
    rows = (await db.execute(stmt)).all()
    return [
        {"id": sub.id, "channel": _public(user), "created_at": sub.created_at}
        for sub, user in rows
    ]


async def count_subscribers(db: AsyncSession, channel_id: UUID) -> int:
    stmt = select(func.count()).select_from(Subscription).where(Subscription.channel_id == channel_id)
    return int((await db.execute(stmt)).scalar_one())


async def count_subscriptions(db: AsyncSession, subscriber_id: UUID) -> int:
    stmt = select(func.count()).select_from(Subscription).where(Subscription.subscriber_id == subscriber_id)
    return int((await db.execute(stmt)).scalar_one())


async def find_subscription(
    db: AsyncSession, subscriber_id: UUID, channel_id: UUID
) -> Optional[Subscription]:
    stmt = select(Subscription).where(
        Subscription.subscriber_id == subscriber_id,
        Subscription.channel_id == channel_id,
    )
    return (await db.execute(stmt)).scalars().first()
