from __future__ import annotations

"""Comment read queries: per-video pages, newest first, owner flattened."""

from typing import List, Tuple
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.models.comment import Comment
from vidtube.db.models.user import User


async def comments_for_video(
    db: AsyncSession,
    video_id: UUID,
    *,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Comment], int]:
    base = (
        select(Comment)
        .join(User, User.id == Comment.owner_id)
        .where(Comment.video_id == video_id)
    )
    total = (
        await db.execute(select(func.count()).select_from(base.subquery()))
    ).scalar_one()
    stmt = (
        base.order_by(desc(Comment.created_at), desc(Comment.id))
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list((await db.execute(stmt)).scalars().all()), int(total)
