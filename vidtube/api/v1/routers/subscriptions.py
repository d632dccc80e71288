# vidtube/api/v1/routers/subscriptions.py
from __future__ import annotations

"""
Subscriptions API — VidTube

POST /subscriptions/c/{channelId}     toggle
GET  /subscriptions/c/{channelId}     the channel's subscribers
GET  /subscriptions/u/{subscriberId}  channels the user follows
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.envelope import api_response
from vidtube.services import subscription_service

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"], dependencies=[Depends(get_current_user)])


@router.post("/c/{channel_id}", summary="Subscribe / unsubscribe")
async def toggle_subscription(
    channel_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    result = await subscription_service.toggle_subscription(db, current_user, channel_id)
    return api_response(None, result.message)


@router.get("/c/{channel_id}", summary="Subscribers of a channel")
async def channel_subscribers(
    channel_id: UUID,
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    subscribers = await subscription_service.get_channel_subscribers(db, channel_id)
    return api_response(subscribers, "Subscribers retrieved successfully")


@router.get("/u/{subscriber_id}", summary="Channels a user is subscribed to")
async def subscribed_channels(
    subscriber_id: UUID,
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    channels = await subscription_service.get_subscribed_channels(db, subscriber_id)
    return api_response(channels, "Subscriptions retrieved successfully")


__all__ = ["router"]
