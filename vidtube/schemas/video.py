from __future__ import annotations

from typing import List, Literal, Optional
from uuid import UUID

from pydantic import Field

from vidtube.schemas.common import CamelModel, OwnerOut, Timestamped

SortField = Literal["createdAt", "views", "duration", "title"]
SortDirection = Literal["asc", "desc"]


class VideoOut(Timestamped):
    id: UUID
    title: str
    description: str
    tags: List[str] = Field(default_factory=list)
    video_file: str
    thumbnail: str
    duration: Optional[float] = None
    views: int = 0
    is_published: bool = True
    owner_id: Optional[UUID] = None
    owner: Optional[OwnerOut] = None


class VideoPage(CamelModel):
    items: List[VideoOut]
    page: int
    limit: int
    total: int
