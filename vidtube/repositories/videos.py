from __future__ import annotations

"""Video read queries.

Each query keeps the pipeline order: filter → join owner → sort → paginate.
Owner projection (`username`, `fullName`, `avatar`) rides on `Video.owner`
(select-in loaded) and is flattened by `VideoOut.owner`.
"""

from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import String, and_, asc, column, desc, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from vidtube.db.models.user import User
from vidtube.db.models.video import Video
from vidtube.db.models.watch_history import WatchHistoryEntry

SORT_COLUMNS = {
    "createdAt": Video.created_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}


def _tag_matches(tag: str, dialect: str):
    """Any element of `Video.tags` contains `tag`, case-insensitively."""
    value = column("value", String)
    if dialect == "sqlite":
        elements = func.json_each(Video.tags).table_valued(value).alias("tag_elements")
    else:
        # json_array_elements_text(...) AS tag_elements(value)
        elements = func.json_array_elements_text(Video.tags).table_valued(value).render_derived(
            name="tag_elements"
        )
    return exists(
        select(1).select_from(elements).where(elements.c.value.icontains(tag, autoescape=True))
    )


def _search_filters(query: str, tag: str, dialect: str) -> list:
    clauses = []
    terms = [t for t in (query or "").split() if t]
    if terms:
        clauses.append(
            or_(*[
                or_(
                    Video.title.icontains(term, autoescape=True),
                    Video.description.icontains(term, autoescape=True),
                )
                for term in terms
            ])
        )
    if tag and tag.strip():
        clauses.append(_tag_matches(tag.strip(), dialect))
    return clauses


def published_videos_stmt(
    *,
    query: str = "",
    tag: str = "",
    owner_id: Optional[UUID] = None,
    dialect: str = "postgresql",
) -> Select:
    stmt = (
        select(Video)
        .join(User, User.id == Video.owner_id)
        .where(Video.is_published.is_(True))
    )
    if owner_id is not None:
        stmt = stmt.where(Video.owner_id == owner_id)
    filters = _search_filters(query, tag, dialect)
    if filters:
        stmt = stmt.where(and_(*filters))
    return stmt


async def search_published_videos(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 10,
    query: str = "",
    tag: str = "",
    sort_by: str = "createdAt",
    sort_type: str = "desc",
    owner_id: Optional[UUID] = None,
) -> Tuple[List[Video], int]:
    """One page of published videos plus the total match count."""
    base = published_videos_stmt(
        query=query, tag=tag, owner_id=owner_id, dialect=db.get_bind().dialect.name
    )

    total = (
        await db.execute(select(func.count()).select_from(base.order_by(None).subquery()))
    ).scalar_one()

    column = SORT_COLUMNS.get(sort_by, Video.created_at)
    direction = asc if sort_type == "asc" else desc
    stmt = (
        base.order_by(direction(column), direction(Video.id))
        .offset((page - 1) * limit)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).scalars().all()
    return list(rows), int(total)


async def count_distinct_viewers(db: AsyncSession, video_id: UUID) -> int:
    """
    Distinct viewers of one video.

    Inner group collapses repeat views per (video, user); the outer group
    counts what is left per video.
    """
    per_viewer = (
        select(WatchHistoryEntry.video_id, WatchHistoryEntry.user_id)
        .where(WatchHistoryEntry.video_id == video_id)
        .group_by(WatchHistoryEntry.video_id, WatchHistoryEntry.user_id)
        .subquery()
    )
    stmt = (
        select(func.count().label("views"))
        .select_from(per_viewer)
        .group_by(per_viewer.c.video_id)
    )
    return int((await db.execute(stmt)).scalar() or 0)


async def watch_history_videos(db: AsyncSession, user_id: UUID) -> Sequence[Video]:
    """Videos the user watched, most recent view first, one entry per view."""
    stmt = (
        select(Video)
        .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
        .where(WatchHistoryEntry.user_id == user_id)
        .order_by(desc(WatchHistoryEntry.watched_at), desc(WatchHistoryEntry.id))
    )
    return (await db.execute(stmt)).scalars().all()


async def channel_videos(db: AsyncSession, owner_id: UUID) -> Sequence[Video]:
    """All of an owner's videos (published or not), newest first."""
    stmt = (
        select(Video)
        .where(Video.owner_id == owner_id)
        .order_by(desc(Video.created_at), desc(Video.id))
    )
    return (await db.execute(stmt)).scalars().all()


__all__ = [
    "SORT_COLUMNS",
    "published_videos_stmt",
    "search_published_videos",
    "count_distinct_viewers",
    "watch_history_videos",
    "channel_videos",
]
