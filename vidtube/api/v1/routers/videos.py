# vidtube/api/v1/routers/videos.py
from __future__ import annotations

"""
Videos API — VidTube
====================

All routes require an authenticated caller.

GET    /videos                                browse / search published videos
POST   /videos                                publish (multipart: videoFile + thumbnail)
GET    /videos/{videoId}
PATCH  /videos/view/{videoId}                 record a view
PATCH  /videos/{videoId}                      owner edit (multipart, all optional)
DELETE /videos/{videoId}                      owner delete with cascade
PATCH  /videos/toggle-publish-status/{videoId}
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.envelope import api_response
from vidtube.schemas.video import SortDirection, SortField
from vidtube.services import video_service
from vidtube.services.media_service import MediaRelay, get_media_relay

router = APIRouter(prefix="/videos", tags=["Videos"], dependencies=[Depends(get_current_user)])


@router.get("", summary="Browse published videos")
async def list_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    query: str = Query(""),
    tag: str = Query(""),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_type: SortDirection = Query("desc", alias="sortType"),
    user_id: Optional[UUID] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    """
    Filters:
        - `query`: whitespace-separated terms, any of which may match title or description
        - `tag`: case-insensitive tag match
        - `userId`: only this owner's videos
    """
    result = await video_service.list_videos(
        db,
        page=page,
        limit=limit,
        query=query,
        tag=tag,
        sort_by=sort_by,
        sort_type=sort_type,
        owner_id=user_id,
    )
    return api_response(result, "Videos fetched successfully")


@router.post("", status_code=status.HTTP_201_CREATED, summary="Publish a video")
async def publish_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
    relay: MediaRelay = Depends(get_media_relay),
) -> JSONResponse:
    video = await video_service.publish_video(
        db,
        relay,
        current_user,
        title=title,
        description=description,
        tags=tags,
        video_file=video_file,
        thumbnail=thumbnail,
    )
    return api_response(video, "Video published successfully", status.HTTP_201_CREATED)


@router.get("/{video_id}", summary="Get a video")
async def get_video(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    video = await video_service.get_video(db, current_user, video_id)
    return api_response(video, "Video fetched successfully")


@router.patch("/view/{video_id}", summary="Record a view")
async def view_video(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    video = await video_service.view_video(db, current_user, video_id)
    return api_response(video, "Video viewed successfully")


@router.patch("/toggle-publish-status/{video_id}", summary="Publish / unpublish")
async def toggle_publish_status(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    video = await video_service.toggle_publish_status(db, current_user, video_id)
    return api_response(video, "Video publish status updated successfully")


@router.patch("/{video_id}", summary="Edit a video")
async def update_video(
    video_id: UUID,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
    relay: MediaRelay = Depends(get_media_relay),
) -> JSONResponse:
    video = await video_service.update_video(
        db,
        relay,
        current_user,
        video_id,
        title=title,
        description=description,
        tags=tags,
        thumbnail=thumbnail,
    )
    return api_response(video, "Video updated successfully")


@router.delete("/{video_id}", summary="Delete a video")
async def delete_video(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
    relay: MediaRelay = Depends(get_media_relay),
) -> JSONResponse:
    await video_service.delete_video(db, relay, current_user, video_id)
    return api_response({}, "Video deleted successfully")


__all__ = ["router"]
