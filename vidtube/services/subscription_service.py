from __future__ import annotations

"""Subscription service: toggle a subscription and list both directions."""

from dataclasses import dataclass
from typing import List
from uuid import UUID
import logging

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.exceptions import ApiError
from vidtube.db.models.subscription import Subscription
from vidtube.db.models.user import User
from vidtube.repositories import subscriptions as subscription_repo
from vidtube.schemas.user import SubscriptionOut
from vidtube.utils.validation_utils import require_found

logger = logging.getLogger("vidtube.subscriptions")


@dataclass(frozen=True)
class SubscriptionToggle:
    subscribed: bool

    @property
    def message(self) -> str:
        return "Subscribed successfully" if self.subscribed else "Unsubscribed successfully"


async def _get_user(db: AsyncSession, user_id: UUID, message: str) -> User:
    user = (await db.execute(select(User).where(User.id == user_id))).scalars().first()
    return require_found(user, message)


async def toggle_subscription(db: AsyncSession, subscriber: User, channel_id: UUID) -> SubscriptionToggle:
    channel = await _get_user(db, channel_id, "Channel not found")
    if channel.id == subscriber.id:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "You cannot subscribe to your own channel")

    existing = await subscription_repo.find_subscription(db, subscriber.id, channel.id)
    if existing is not None:
        try:
            await db.delete(existing)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Unsubscribe failed: %s", e)
            raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unsubscription failed") from e
        return SubscriptionToggle(subscribed=False)

    try:
        db.add(Subscription(subscriber_id=subscriber.id, channel_id=channel.id))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Subscribe failed: %s", e)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Subscription failed") from e
    return SubscriptionToggle(subscribed=True)


async def get_channel_subscribers(db: AsyncSession, channel_id: UUID) -> List[SubscriptionOut]:
    channel = await _get_user(db, channel_id, "Channel not found")
    rows = await subscription_repo.subscribers_of(db, channel.id)
    return [SubscriptionOut.model_validate(r) for r in rows]


async def get_subscribed_channels(db: AsyncSession, subscriber_id: UUID) -> List[SubscriptionOut]:
    user = await _get_user(db, subscriber_id, "User not found")
    rows = await subscription_repo.subscriptions_of(db, user.id)
    return [SubscriptionOut.model_validate(r) for r in rows]
