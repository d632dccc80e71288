from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from vidtube.schemas.common import CamelModel, OwnerOut


class TweetCreate(BaseModel):
    content: Optional[str] = None


class TweetUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_content: Optional[str] = Field(None, alias="newContent")


class TweetOut(CamelModel):
    id: UUID
    content: str
    owner: Optional[OwnerOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
