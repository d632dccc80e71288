# vidtube/api/v1/routers/comments.py
from __future__ import annotations

"""
Comments API — VidTube

GET    /comments/{videoId}?page&limit
POST   /comments/{videoId}          {content}
PATCH  /comments/c/{commentId}      {newContent}
DELETE /comments/c/{commentId}
"""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.comment import CommentCreate, CommentUpdate
from vidtube.schemas.envelope import api_response
from vidtube.services import comment_service

router = APIRouter(prefix="/comments", tags=["Comments"], dependencies=[Depends(get_current_user)])


@router.get("/{video_id}", summary="Comments on a video, newest first")
async def list_comments(
    video_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    result = await comment_service.list_video_comments(db, video_id, page=page, limit=limit)
    return api_response(result, "Comments retrieved successfully")


@router.post("/{video_id}", status_code=status.HTTP_201_CREATED, summary="Comment on a video")
async def add_comment(
    video_id: UUID,
    payload: CommentCreate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    comment = await comment_service.add_comment(db, current_user, video_id, payload.content)
    return api_response(comment, "Comment created successfully", status.HTTP_201_CREATED)


@router.patch("/c/{comment_id}", summary="Edit own comment")
async def update_comment(
    comment_id: UUID,
    payload: CommentUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    comment = await comment_service.update_comment(db, current_user, comment_id, payload.new_content)
    return api_response(comment, "Comment updated successfully")


@router.delete("/c/{comment_id}", summary="Delete own comment")
async def delete_comment(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    await comment_service.delete_comment(db, current_user, comment_id)
    return api_response({}, "Comment deleted successfully")


__all__ = ["router"]
