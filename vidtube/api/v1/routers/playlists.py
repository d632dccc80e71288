# vidtube/api/v1/routers/playlists.py
from __future__ import annotations

"""
Playlists API — VidTube

POST   /playlists                               {name, description}
GET    /playlists/{playlistId}
PATCH  /playlists/{playlistId}                  {name?, description?}
DELETE /playlists/{playlistId}
PATCH  /playlists/add/{videoId}/{playlistId}
PATCH  /playlists/remove/{videoId}/{playlistId}
GET    /playlists/user/{userId}

Mutations are owner-only (403 otherwise).
"""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.envelope import api_response
from vidtube.schemas.playlist import PlaylistCreate, PlaylistUpdate
from vidtube.services import playlist_service

router = APIRouter(prefix="/playlists", tags=["Playlists"], dependencies=[Depends(get_current_user)])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a playlist")
async def create_playlist(
    payload: PlaylistCreate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    playlist = await playlist_service.create_playlist(
        db, current_user, name=payload.name, description=payload.description
    )
    return api_response(playlist, "Playlist created successfully", status.HTTP_201_CREATED)


@router.get("/user/{user_id}", summary="A user's playlists")
async def user_playlists(
    user_id: UUID,
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    playlists = await playlist_service.get_user_playlists(db, user_id)
    return api_response(playlists, "Playlists retrieved successfully")


@router.patch("/add/{video_id}/{playlist_id}", summary="Add a video")
async def add_video(
    video_id: UUID,
    playlist_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    playlist = await playlist_service.add_video(db, current_user, video_id, playlist_id)
    return api_response(playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}", summary="Remove a video")
async def remove_video(
    video_id: UUID,
    playlist_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    playlist = await playlist_service.remove_video(db, current_user, video_id, playlist_id)
    return api_response(playlist, "Video removed from playlist successfully")


@router.get("/{playlist_id}", summary="Get a playlist")
async def get_playlist(
    playlist_id: UUID,
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    playlist = await playlist_service.get_playlist(db, playlist_id)
    return api_response(playlist, "Playlist retrieved successfully")


@router.patch("/{playlist_id}", summary="Rename / re-describe a playlist")
async def update_playlist(
    playlist_id: UUID,
    payload: PlaylistUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    playlist = await playlist_service.update_playlist(
        db, current_user, playlist_id, name=payload.name, description=payload.description
    )
    return api_response(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}", summary="Delete a playlist")
async def delete_playlist(
    playlist_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    await playlist_service.delete_playlist(db, current_user, playlist_id)
    return api_response({}, "Playlist deleted successfully")


__all__ = ["router"]
