from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from vidtube.schemas.common import OwnerOut, Timestamped
from vidtube.schemas.video import VideoOut


class PlaylistCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class PlaylistUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class PlaylistOut(Timestamped):
    id: UUID
    name: str
    description: str
    owner: Optional[OwnerOut] = None
    videos: List[VideoOut] = Field(default_factory=list)
    total_videos: int = 0
