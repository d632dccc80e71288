# vidtube/api/v1/routers/dashboard.py
from __future__ import annotations

"""Dashboard API: the caller's channel statistics and video list."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.envelope import api_response
from vidtube.services import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", summary="Channel statistics")
async def channel_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    stats = await dashboard_service.get_channel_stats(db, current_user)
    return api_response(stats, "Channel stats retrieved successfully")


@router.get("/videos", summary="All of my videos")
async def channel_videos(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    videos = await dashboard_service.get_channel_videos(db, current_user)
    return api_response(videos, "Channel videos retrieved successfully")


__all__ = ["router"]
