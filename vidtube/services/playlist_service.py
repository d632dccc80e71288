from __future__ import annotations

"""
Playlist service — VidTube
==========================

Owner-only CRUD over named, ordered video sets. Names are unique per owner
(409 on conflict); a video appears at most once per playlist.
"""

from typing import List, Optional
from uuid import UUID
import logging

from fastapi import status
from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.exceptions import ApiError
from vidtube.db.models.playlist import Playlist, PlaylistVideo
from vidtube.db.models.user import User
from vidtube.db.models.video import Video
from vidtube.schemas.common import OwnerOut
from vidtube.schemas.playlist import PlaylistOut
from vidtube.schemas.video import VideoOut
from vidtube.services.video_service import get_video_or_404
from vidtube.utils.validation_utils import clean, ensure_owner, require_found

logger = logging.getLogger("vidtube.playlists")

PLAYLIST_EXISTS = "Playlist already exists"


async def to_out(db: AsyncSession, playlist: Playlist) -> PlaylistOut:
    """Playlist with its videos in insertion order."""
    stmt = (
        select(Video)
        .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
        .where(PlaylistVideo.playlist_id == playlist.id)
        .order_by(PlaylistVideo.position)
    )
    videos = [VideoOut.model_validate(v) for v in (await db.execute(stmt)).scalars().all()]
    return PlaylistOut(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner=OwnerOut.model_validate(playlist.owner) if playlist.owner is not None else None,
        videos=videos,
        total_videos=len(videos),
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


async def _get_playlist_or_404(db: AsyncSession, playlist_id: UUID) -> Playlist:
    playlist = (await db.execute(select(Playlist).where(Playlist.id == playlist_id))).scalars().first()
    return require_found(playlist, "Playlist not found")


async def _reload(db: AsyncSession, playlist: Playlist) -> Playlist:
    await db.refresh(playlist)
    return playlist


async def _name_taken(db: AsyncSession, owner_id: UUID, name: str, exclude: Optional[UUID] = None) -> bool:
    stmt = select(Playlist.id).where(Playlist.owner_id == owner_id, Playlist.name == name)
    if exclude is not None:
        stmt = stmt.where(Playlist.id != exclude)
    return (await db.execute(stmt)).first() is not None


async def create_playlist(
    db: AsyncSession, user: User, *, name: Optional[str], description: Optional[str]
) -> PlaylistOut:
    name_text, description_text = clean(name), clean(description)
    if not name_text or not description_text:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Name and description are required")
    if await _name_taken(db, user.id, name_text):
        raise ApiError(status.HTTP_409_CONFLICT, PLAYLIST_EXISTS)

    playlist = Playlist(name=name_text, description=description_text, owner_id=user.id)
    db.add(playlist)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ApiError(status.HTTP_409_CONFLICT, PLAYLIST_EXISTS)
    return await to_out(db, await _reload(db, playlist))


async def get_playlist(db: AsyncSession, playlist_id: UUID) -> PlaylistOut:
    return await to_out(db, await _get_playlist_or_404(db, playlist_id))


async def get_user_playlists(db: AsyncSession, user_id: UUID) -> List[PlaylistOut]:
    require_found(
        (await db.execute(select(User.id).where(User.id == user_id))).first(),
        "User not found",
    )
    stmt = select(Playlist).where(Playlist.owner_id == user_id).order_by(desc(Playlist.created_at))
    return [await to_out(db, p) for p in (await db.execute(stmt)).scalars().all()]


async def update_playlist(
    db: AsyncSession,
    user: User,
    playlist_id: UUID,
    *,
    name: Optional[str],
    description: Optional[str],
) -> PlaylistOut:
    playlist = await _get_playlist_or_404(db, playlist_id)
    ensure_owner(playlist.owner_id, user.id)

    name_text, description_text = clean(name), clean(description)
    if not name_text and not description_text:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Name or description is required")
    if name_text and name_text != playlist.name:
        if await _name_taken(db, user.id, name_text, exclude=playlist.id):
            raise ApiError(status.HTTP_409_CONFLICT, PLAYLIST_EXISTS)
        playlist.name = name_text
    if description_text:
        playlist.description = description_text

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ApiError(status.HTTP_409_CONFLICT, PLAYLIST_EXISTS)
    return await to_out(db, await _reload(db, playlist))


async def delete_playlist(db: AsyncSession, user: User, playlist_id: UUID) -> None:
    playlist = await _get_playlist_or_404(db, playlist_id)
    ensure_owner(playlist.owner_id, user.id)

    await db.execute(delete(PlaylistVideo).where(PlaylistVideo.playlist_id == playlist.id))
    await db.execute(delete(Playlist).where(Playlist.id == playlist.id))
    await db.commit()
    logger.info("Deleted playlist=%s", playlist_id)


async def add_video(db: AsyncSession, user: User, video_id: UUID, playlist_id: UUID) -> PlaylistOut:
    """Append a video; adding one that is already present is a no-op."""
    playlist = await _get_playlist_or_404(db, playlist_id)
    ensure_owner(playlist.owner_id, user.id)
    video = await get_video_or_404(db, video_id)

    present = (
        await db.execute(
            select(PlaylistVideo).where(
                PlaylistVideo.playlist_id == playlist.id,
                PlaylistVideo.video_id == video.id,
            )
        )
    ).scalars().first()
    if present is None:
        next_position = (
            await db.execute(
                select(func.coalesce(func.max(PlaylistVideo.position), -1) + 1).where(
                    PlaylistVideo.playlist_id == playlist.id
                )
            )
        ).scalar_one()
        db.add(PlaylistVideo(playlist_id=playlist.id, video_id=video.id, position=next_position))
        await db.commit()
    return await to_out(db, await _reload(db, playlist))


async def remove_video(db: AsyncSession, user: User, video_id: UUID, playlist_id: UUID) -> PlaylistOut:
    playlist = await _get_playlist_or_404(db, playlist_id)
    ensure_owner(playlist.owner_id, user.id)

    result = await db.execute(
        delete(PlaylistVideo).where(
            PlaylistVideo.playlist_id == playlist.id,
            PlaylistVideo.video_id == video_id,
        )
    )
    if result.rowcount == 0:
        await db.rollback()
        raise ApiError(status.HTTP_404_NOT_FOUND, "Video not found in the playlist")
    await db.commit()
    return await to_out(db, await _reload(db, playlist))
