# vidtube/services/video_service.py
from __future__ import annotations

"""
Video service — VidTube
=======================

- **Publish** (multipart: video file + thumbnail, duration probed on upload)
- **Search/list** published videos (text query, tag, sort, pagination)
- **View**: append to watch history and recompute the distinct-viewer count
- **Update / delete / toggle publish**: owner only

Deletion runs as one transaction: watch-history rows, comment likes,
comments, video likes, playlist entries and the video go together. Stored
media is removed after commit, best-effort.
"""

from typing import List, Optional
from uuid import UUID
import logging

from fastapi import UploadFile, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.exceptions import ApiError
from vidtube.db.models.comment import Comment
from vidtube.db.models.like import Like
from vidtube.db.models.playlist import PlaylistVideo
from vidtube.db.models.user import User
from vidtube.db.models.video import Video
from vidtube.db.models.watch_history import WatchHistoryEntry
from vidtube.repositories import videos as video_repo
from vidtube.schemas.video import VideoOut, VideoPage
from vidtube.services.media_service import MediaRelay
from vidtube.utils.validation_utils import clean, ensure_owner, require_found

logger = logging.getLogger("vidtube.videos")

VIDEO_NOT_FOUND = "Video not found"
NOT_PUBLISHED = "Video is not published"


def parse_tags(raw: Optional[str]) -> List[str]:
    """`"python, fastapi,,  sql"` → `["python", "fastapi", "sql"]`."""
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


async def get_video_or_404(db: AsyncSession, video_id: UUID, message: str = VIDEO_NOT_FOUND) -> Video:
    video = (await db.execute(select(Video).where(Video.id == video_id))).scalars().first()
    return require_found(video, message)


# ─────────────────────────────────────────────────────────────
# 📤 Publish
# ─────────────────────────────────────────────────────────────
async def publish_video(
    db: AsyncSession,
    relay: MediaRelay,
    owner: User,
    *,
    title: Optional[str],
    description: Optional[str],
    tags: Optional[str],
    video_file: Optional[UploadFile],
    thumbnail: Optional[UploadFile],
) -> VideoOut:
    title_text, description_text = clean(title), clean(description)
    if not title_text or not description_text:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Title and description are required")
    if video_file is None or not video_file.filename or thumbnail is None or not thumbnail.filename:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Video file and thumbnail are required")

    stored_video = await relay.store_upload(video_file, probe=True)
    try:
        stored_thumb = await relay.store_upload(thumbnail)
    except ApiError:
        await relay.remove(stored_video.url)
        raise

    video = Video(
        title=title_text,
        description=description_text,
        tags=parse_tags(tags),
        video_file=stored_video.url,
        thumbnail=stored_thumb.url,
        duration=stored_video.duration,
        owner_id=owner.id,
    )
    db.add(video)
    await db.commit()
    await db.refresh(video)
    logger.info("Published video=%s owner=%s", video.id, owner.id)
    return VideoOut.model_validate(video)


# ─────────────────────────────────────────────────────────────
# 🔎 List / get
# ─────────────────────────────────────────────────────────────
async def list_videos(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 10,
    query: str = "",
    tag: str = "",
    sort_by: str = "createdAt",
    sort_type: str = "desc",
    owner_id: Optional[UUID] = None,
) -> VideoPage:
    rows, total = await video_repo.search_published_videos(
        db,
        page=page,
        limit=limit,
        query=query,
        tag=tag,
        sort_by=sort_by,
        sort_type=sort_type,
        owner_id=owner_id,
    )
    if not rows:
        raise ApiError(status.HTTP_404_NOT_FOUND, "No videos found based on the query parameters")
    return VideoPage(
        items=[VideoOut.model_validate(v) for v in rows],
        page=page,
        limit=limit,
        total=total,
    )


async def get_video(db: AsyncSession, viewer: User, video_id: UUID) -> VideoOut:
    video = await get_video_or_404(db, video_id)
    if not video.is_published and video.owner_id != viewer.id:
        raise ApiError(status.HTTP_403_FORBIDDEN, NOT_PUBLISHED)
    return VideoOut.model_validate(video)


# ─────────────────────────────────────────────────────────────
# 👀 View
# ─────────────────────────────────────────────────────────────
async def view_video(db: AsyncSession, viewer: User, video_id: UUID) -> VideoOut:
    """Record a view and overwrite `views` with the distinct-viewer count."""
    video = await get_video_or_404(db, video_id)
    if not video.is_published:
        raise ApiError(status.HTTP_403_FORBIDDEN, NOT_PUBLISHED)

    db.add(WatchHistoryEntry(user_id=viewer.id, video_id=video.id))
    await db.flush()

    video.views = await video_repo.count_distinct_viewers(db, video.id)
    await db.commit()
    await db.refresh(video)
    return VideoOut.model_validate(video)


# ─────────────────────────────────────────────────────────────
# ✏️ Update
# ─────────────────────────────────────────────────────────────
async def update_video(
    db: AsyncSession,
    relay: MediaRelay,
    user: User,
    video_id: UUID,
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[str] = None,
    thumbnail: Optional[UploadFile] = None,
) -> VideoOut:
    video = await get_video_or_404(db, video_id)
    ensure_owner(video.owner_id, user.id)

    has_thumb = thumbnail is not None and bool(thumbnail.filename)
    title_text, description_text = clean(title), clean(description)
    if not (title_text or description_text or tags is not None or has_thumb):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "At least one field is required to update the video")

    old_thumb: Optional[str] = None
    if has_thumb:
        stored = await relay.store_upload(thumbnail)
        old_thumb, video.thumbnail = video.thumbnail, stored.url
    if title_text:
        video.title = title_text
    if description_text:
        video.description = description_text
    if tags is not None:
        video.tags = parse_tags(tags)

    await db.commit()
    await db.refresh(video)
    await relay.remove(old_thumb)
    return VideoOut.model_validate(video)


# ─────────────────────────────────────────────────────────────
# 🗑️ Delete
# ─────────────────────────────────────────────────────────────
async def delete_video(db: AsyncSession, relay: MediaRelay, user: User, video_id: UUID) -> None:
    video = await get_video_or_404(db, video_id)
    ensure_owner(video.owner_id, user.id)
    media = (video.video_file, video.thumbnail)

    comment_ids = select(Comment.id).where(Comment.video_id == video.id)
    await db.execute(delete(WatchHistoryEntry).where(WatchHistoryEntry.video_id == video.id))
    await db.execute(delete(Like).where(Like.comment_id.in_(comment_ids)))
    await db.execute(delete(Comment).where(Comment.video_id == video.id))
    await db.execute(delete(Like).where(Like.video_id == video.id))
    await db.execute(delete(PlaylistVideo).where(PlaylistVideo.video_id == video.id))
    await db.execute(delete(Video).where(Video.id == video.id))
    await db.commit()
    logger.info("Deleted video=%s owner=%s", video_id, user.id)

    for url in media:
        await relay.remove(url)


# ─────────────────────────────────────────────────────────────
# 🔁 Publish toggle
# ─────────────────────────────────────────────────────────────
async def toggle_publish_status(db: AsyncSession, user: User, video_id: UUID) -> VideoOut:
    video = await get_video_or_404(db, video_id)
    ensure_owner(video.owner_id, user.id)
    video.is_published = not video.is_published
    await db.commit()
    await db.refresh(video)
    return VideoOut.model_validate(video)


__all__ = [
    "parse_tags",
    "get_video_or_404",
    "publish_video",
    "list_videos",
    "get_video",
    "view_video",
    "update_video",
    "delete_video",
    "toggle_publish_status",
]
