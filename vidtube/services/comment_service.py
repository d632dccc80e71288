from __future__ import annotations

"""Comment service: list, add, edit and delete comments on published videos."""

from uuid import UUID
import logging

from fastapi import status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.exceptions import ApiError
from vidtube.db.models.comment import Comment
from vidtube.db.models.like import Like
from vidtube.db.models.user import User
from vidtube.repositories.comments import comments_for_video
from vidtube.schemas.comment import CommentOut, CommentPage
from vidtube.services.video_service import NOT_PUBLISHED, get_video_or_404
from vidtube.utils.validation_utils import ensure_owner, require_found, require_text

logger = logging.getLogger("vidtube.comments")

NOT_AUTHORIZED = "You are not authorized to perform this action"


async def _get_comment_or_404(db: AsyncSession, comment_id: UUID) -> Comment:
    comment = (await db.execute(select(Comment).where(Comment.id == comment_id))).scalars().first()
    return require_found(comment, "Comment not found")


async def list_video_comments(db: AsyncSession, video_id: UUID, *, page: int = 1, limit: int = 10) -> CommentPage:
    video = await get_video_or_404(db, video_id, "Video not found or is not published")
    if not video.is_published:
        raise ApiError(status.HTTP_403_FORBIDDEN, NOT_PUBLISHED)

    rows, total = await comments_for_video(db, video.id, page=page, limit=limit)
    if not rows:
        raise ApiError(status.HTTP_404_NOT_FOUND, "No comments found")
    return CommentPage(
        items=[CommentOut.model_validate(c) for c in rows],
        page=page,
        limit=limit,
        total=total,
    )


async def add_comment(db: AsyncSession, user: User, video_id: UUID, content: str | None) -> CommentOut:
    text = require_text(content, "Content is required")
    video = await get_video_or_404(db, video_id)
    if not video.is_published:
        raise ApiError(status.HTTP_403_FORBIDDEN, NOT_PUBLISHED)

    comment = Comment(content=text, video_id=video.id, owner_id=user.id)
    db.add(comment)
    await db.commit()
    await db.refresh(comment)
    return CommentOut.model_validate(comment)


async def update_comment(db: AsyncSession, user: User, comment_id: UUID, new_content: str | None) -> CommentOut:
    comment = await _get_comment_or_404(db, comment_id)
    ensure_owner(comment.owner_id, user.id, NOT_AUTHORIZED)
    text = require_text(new_content, "Content is required")

    comment.content = text
    await db.commit()
    await db.refresh(comment)
    return CommentOut.model_validate(comment)


async def delete_comment(db: AsyncSession, user: User, comment_id: UUID) -> None:
    comment = await _get_comment_or_404(db, comment_id)
    ensure_owner(comment.owner_id, user.id, NOT_AUTHORIZED)

    await db.execute(delete(Like).where(Like.comment_id == comment.id))
    await db.execute(delete(Comment).where(Comment.id == comment.id))
    await db.commit()
    logger.info("Deleted comment=%s", comment_id)
