# tests/test_dashboard/test_dashboard.py
from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.utils.factory import create_comment, create_tweet, create_video
from vidtube.db.models.like import Like
from vidtube.db.models.subscription import Subscription

BASE = "/api/v1/dashboard"


@pytest.mark.anyio
async def test_channel_stats(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    owner, headers = await user_with_headers(username="creator")
    fan = await create_test_user()
    other_fan = await create_test_user()

    hit = await create_video(db_session, owner)
    draft = await create_video(db_session, owner, is_published=False)
    hit.views, draft.views = 7, 3
    await create_comment(db_session, hit, fan)
    await create_comment(db_session, hit, other_fan)
    tweet = await create_tweet(db_session, owner)
    db_session.add_all([
        Like(liked_by_id=fan.id, video_id=hit.id),
        Like(liked_by_id=other_fan.id, video_id=hit.id),
        Like(liked_by_id=fan.id, tweet_id=tweet.id),
        Subscription(subscriber_id=fan.id, channel_id=owner.id),
        Subscription(subscriber_id=other_fan.id, channel_id=owner.id),
    ])
    await db_session.commit()

    resp = await async_client.get(f"{BASE}/stats", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Channel stats retrieved successfully"
    data = resp.json()["data"]
    assert data["user"]["username"] == "creator"
    assert data["videoStats"] == {
        "totalVideos": 2,
        "totalViews": 10,
        "totalLikes": 2,
        "totalComments": 2,
    }
    assert data["tweetStats"] == {"totalTweets": 1, "totalLikes": 1}
    assert data["totalSubscribers"] == 2


@pytest.mark.anyio
async def test_empty_channel_stats_are_zero(async_client: AsyncClient, user_with_headers):
    _owner, headers = await user_with_headers()
    data = (await async_client.get(f"{BASE}/stats", headers=headers)).json()["data"]
    assert data["videoStats"]["totalVideos"] == 0
    assert data["tweetStats"]["totalTweets"] == 0
    assert data["totalSubscribers"] == 0


@pytest.mark.anyio
async def test_channel_videos_include_unpublished(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    owner, headers = await user_with_headers()
    stranger = await create_test_user()
    await create_video(db_session, owner, title="Public")
    await create_video(db_session, owner, title="Private", is_published=False)
    await create_video(db_session, stranger, title="Not mine")

    resp = await async_client.get(f"{BASE}/videos", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Channel videos retrieved successfully"
    assert [v["title"] for v in resp.json()["data"]] == ["Private", "Public"]
