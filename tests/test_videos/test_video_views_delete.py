# tests/test_videos/test_video_views_delete.py
from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.fixtures.mocks.storage import MockS3
from tests.utils.factory import create_comment, create_video
from vidtube.db.models.comment import Comment
from vidtube.db.models.like import Like
from vidtube.db.models.playlist import Playlist, PlaylistVideo
from vidtube.db.models.video import Video
from vidtube.db.models.watch_history import WatchHistoryEntry

BASE = "/api/v1/videos"


async def _count(db: AsyncSession, stmt) -> int:
    return (await db.execute(stmt)).scalar_one()


@pytest.mark.anyio
async def test_repeated_views_count_one_viewer(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    owner = await create_test_user()
    viewer, headers = await user_with_headers()
    _second, second_headers = await user_with_headers()
    video = await create_video(db_session, owner)
    video_id, viewer_id = video.id, viewer.id

    for _ in range(3):
        resp = await async_client.patch(f"{BASE}/view/{video_id}", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["views"] == 1
        assert resp.json()["message"] == "Video viewed successfully"

    entries = await _count(
        db_session,
        select(func.count()).select_from(WatchHistoryEntry).where(WatchHistoryEntry.user_id == viewer_id),
    )
    assert entries == 3

    other = await async_client.patch(f"{BASE}/view/{video_id}", headers=second_headers)
    assert other.json()["data"]["views"] == 2


@pytest.mark.anyio
async def test_view_unpublished_is_forbidden(async_client: AsyncClient, db_session: AsyncSession, user_with_headers):
    owner, headers = await user_with_headers()
    draft = await create_video(db_session, owner, is_published=False)

    resp = await async_client.patch(f"{BASE}/view/{draft.id}", headers=headers)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_delete_video_cascades(
    async_client: AsyncClient,
    db_session: AsyncSession,
    user_with_headers,
    mock_storage: MockS3,
):
    owner, headers = await user_with_headers()
    fan, fan_headers = await user_with_headers()
    video = await create_video(db_session, owner)
    comment = await create_comment(db_session, video, fan)
    playlist = Playlist(name="Mix", description="d", owner_id=fan.id)
    db_session.add(playlist)
    await db_session.flush()
    db_session.add_all([
        WatchHistoryEntry(user_id=fan.id, video_id=video.id),
        Like(liked_by_id=fan.id, video_id=video.id),
        Like(liked_by_id=owner.id, comment_id=comment.id),
        PlaylistVideo(playlist_id=playlist.id, video_id=video.id, position=0),
    ])
    await db_session.commit()
    video_id = video.id
    media_ids = [u.rsplit("/", 1)[-1].split(".")[0] for u in (video.video_file, video.thumbnail)]

    forbidden = await async_client.delete(f"{BASE}/{video_id}", headers=fan_headers)
    assert forbidden.status_code == 403

    resp = await async_client.delete(f"{BASE}/{video_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {}
    assert resp.json()["message"] == "Video deleted successfully"

    assert await _count(db_session, select(func.count()).select_from(Video).where(Video.id == video_id)) == 0
    assert await _count(
        db_session, select(func.count()).select_from(WatchHistoryEntry).where(WatchHistoryEntry.video_id == video_id)
    ) == 0
    assert await _count(db_session, select(func.count()).select_from(Comment).where(Comment.video_id == video_id)) == 0
    assert await _count(db_session, select(func.count()).select_from(Like)) == 0
    assert await _count(
        db_session, select(func.count()).select_from(PlaylistVideo).where(PlaylistVideo.video_id == video_id)
    ) == 0
    for media_id in media_ids:
        assert f"media/{media_id}" in mock_storage.deleted_prefixes

    again = await async_client.delete(f"{BASE}/{video_id}", headers=headers)
    assert again.status_code == 404
