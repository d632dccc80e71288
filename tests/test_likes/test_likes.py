# tests/test_likes/test_likes.py
from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.utils.factory import create_comment, create_tweet, create_video
from vidtube.db.models.like import Like

BASE = "/api/v1/likes"


@pytest.mark.anyio
async def test_video_like_toggle_round_trip(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    owner = await create_test_user()
    _fan, headers = await user_with_headers()
    _other, other_headers = await user_with_headers()
    video = await create_video(db_session, owner)

    liked = await async_client.post(f"{BASE}/toggle/v/{video.id}", headers=headers)
    assert liked.status_code == 201
    assert liked.json()["message"] == "Liked"
    assert liked.json()["data"] == {"totalLikes": 1}

    also = await async_client.post(f"{BASE}/toggle/v/{video.id}", headers=other_headers)
    assert also.json()["data"] == {"totalLikes": 2}

    unliked = await async_client.post(f"{BASE}/toggle/v/{video.id}", headers=headers)
    assert unliked.status_code == 200
    assert unliked.json()["message"] == "Unliked"
    assert unliked.json()["data"] == {"totalLikes": 1}


@pytest.mark.anyio
async def test_comment_and_tweet_like_toggles(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers
):
    user, headers = await user_with_headers()
    video = await create_video(db_session, user)
    comment = await create_comment(db_session, video, user)
    tweet = await create_tweet(db_session, user)

    for path in (f"toggle/c/{comment.id}", f"toggle/t/{tweet.id}"):
        first = await async_client.post(f"{BASE}/{path}", headers=headers)
        second = await async_client.post(f"{BASE}/{path}", headers=headers)
        assert (first.status_code, first.json()["message"]) == (201, "Liked")
        assert (second.status_code, second.json()["message"]) == (200, "Unliked")
        assert second.json()["data"] == {"totalLikes": 0}


@pytest.mark.anyio
async def test_like_missing_or_unpublished_target(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers
):
    user, headers = await user_with_headers()
    draft = await create_video(db_session, user, is_published=False)

    assert (await async_client.post(f"{BASE}/toggle/v/{uuid4()}", headers=headers)).status_code == 404
    assert (await async_client.post(f"{BASE}/toggle/c/{uuid4()}", headers=headers)).status_code == 404
    assert (await async_client.post(f"{BASE}/toggle/t/{uuid4()}", headers=headers)).status_code == 404
    assert (await async_client.post(f"{BASE}/toggle/v/{draft.id}", headers=headers)).status_code == 403


@pytest.mark.anyio
async def test_liked_listings(async_client: AsyncClient, db_session: AsyncSession, user_with_headers):
    user, headers = await user_with_headers()
    video = await create_video(db_session, user, title="Liked one")
    comment = await create_comment(db_session, video, user, "nice")
    tweet = await create_tweet(db_session, user, "hello")

    for kind in ("videos", "comments", "tweets"):
        resp = await async_client.get(f"{BASE}/{kind}", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == f"No liked {kind} found"

    await async_client.post(f"{BASE}/toggle/v/{video.id}", headers=headers)
    await async_client.post(f"{BASE}/toggle/c/{comment.id}", headers=headers)
    await async_client.post(f"{BASE}/toggle/t/{tweet.id}", headers=headers)

    videos = await async_client.get(f"{BASE}/videos", headers=headers)
    assert videos.status_code == 200
    assert videos.json()["message"] == "Liked videos"
    assert [v["title"] for v in videos.json()["data"]] == ["Liked one"]

    comments = await async_client.get(f"{BASE}/comments", headers=headers)
    assert [c["content"] for c in comments.json()["data"]] == ["nice"]

    tweets = await async_client.get(f"{BASE}/tweets", headers=headers)
    assert [t["content"] for t in tweets.json()["data"]] == ["hello"]


@pytest.mark.anyio
async def test_toggle_write_failure_is_500_and_leaves_rows(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user, failing_commit
):
    owner = await create_test_user()
    fan, headers = await user_with_headers()
    liked_video = await create_video(db_session, owner)
    fresh_video = await create_video(db_session, owner)
    db_session.add(Like(liked_by_id=fan.id, video_id=liked_video.id))
    await db_session.commit()
    liked_id, fresh_id = liked_video.id, fresh_video.id

    failing_commit()

    for video_id in (liked_id, fresh_id):
        resp = await async_client.post(f"{BASE}/toggle/v/{video_id}", headers=headers)
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Failed to update like"

    remaining = (await db_session.execute(select(Like.video_id))).scalars().all()
    assert remaining == [liked_id]
