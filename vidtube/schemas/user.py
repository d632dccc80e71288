from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from vidtube.schemas.common import CamelModel, OwnerOut, Timestamped


class UserOut(Timestamped):
    """A user as returned by the API (never password / refresh token)."""

    id: UUID
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: Optional[str] = None


class ChannelProfileOut(UserOut):
    subscribers_count: int = 0
    channels_subscribed_to_count: int = 0
    is_subscribed: bool = False


class SubscriptionOut(CamelModel):
    id: UUID
    subscriber: Optional[OwnerOut] = None
    channel: Optional[OwnerOut] = None
    created_at: Optional[datetime] = None


class UpdateProfileRequest(BaseModel):
    full_name: Optional[str] = Field(None, alias="fullName")
    email: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    old_password: Optional[str] = Field(None, alias="oldPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")
