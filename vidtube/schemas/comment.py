from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from vidtube.schemas.common import CamelModel, OwnerOut


class CommentCreate(BaseModel):
    content: Optional[str] = None


class CommentUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_content: Optional[str] = Field(None, alias="newContent")


class CommentOut(CamelModel):
    id: UUID
    content: str
    video: UUID = Field(validation_alias="video_id")
    owner: Optional[OwnerOut] = None
    created_at: Optional[datetime] = None


class CommentPage(CamelModel):
    items: List[CommentOut]
    page: int
    limit: int
    total: int
