# tests/test_users/test_user_profile.py
from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.fixtures.mocks.storage import MockS3
from tests.utils.factory import create_video
from vidtube.db.models.subscription import Subscription

BASE = "/api/v1/users"


@pytest.mark.anyio
async def test_my_profile(async_client: AsyncClient, user_with_headers):
    user, headers = await user_with_headers(username="frank")

    resp = await async_client.get(f"{BASE}/my-profile", headers=headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == str(user.id)
    assert data["username"] == "frank"
    assert "password" not in data


@pytest.mark.anyio
async def test_change_password(async_client: AsyncClient, user_with_headers):
    _user, headers = await user_with_headers(username="gina", password="old-pw")

    wrong = await async_client.patch(
        f"{BASE}/change-password", json={"oldPassword": "nope", "newPassword": "new-pw"}, headers=headers
    )
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Invalid old password"

    ok = await async_client.patch(
        f"{BASE}/change-password", json={"oldPassword": "old-pw", "newPassword": "new-pw"}, headers=headers
    )
    assert ok.status_code == 200

    old_login = await async_client.post(f"{BASE}/login", json={"usernameOrEmail": "gina", "password": "old-pw"})
    assert old_login.status_code == 401
    new_login = await async_client.post(f"{BASE}/login", json={"usernameOrEmail": "gina", "password": "new-pw"})
    assert new_login.status_code == 200


@pytest.mark.anyio
async def test_update_profile(async_client: AsyncClient, user_with_headers, create_test_user):
    await create_test_user(email="used@example.com")
    _user, headers = await user_with_headers()

    empty = await async_client.patch(f"{BASE}/update-profile", json={}, headers=headers)
    assert empty.status_code == 400

    taken = await async_client.patch(f"{BASE}/update-profile", json={"email": "used@example.com"}, headers=headers)
    assert taken.status_code == 409

    ok = await async_client.patch(
        f"{BASE}/update-profile", json={"fullName": "New Name", "email": "Fresh@Example.com"}, headers=headers
    )
    assert ok.status_code == 200
    data = ok.json()["data"]
    assert data["fullName"] == "New Name"
    assert data["email"] == "fresh@example.com"


@pytest.mark.anyio
async def test_update_avatar_replaces_and_removes_old(
    async_client: AsyncClient, user_with_headers, mock_storage: MockS3
):
    _user, headers = await user_with_headers()

    first = await async_client.patch(
        f"{BASE}/update-avatar", files={"avatar": ("a.png", b"one", "image/png")}, headers=headers
    )
    assert first.status_code == 200
    first_url = first.json()["data"]["avatar"]

    second = await async_client.patch(
        f"{BASE}/update-avatar", files={"avatar": ("b.png", b"two", "image/png")}, headers=headers
    )
    assert second.status_code == 200
    assert second.json()["data"]["avatar"] != first_url

    first_id = first_url.rsplit("/", 1)[-1].split(".")[0]
    assert f"media/{first_id}" in mock_storage.deleted_prefixes
    assert len(mock_storage.objects) == 1

    missing = await async_client.patch(f"{BASE}/update-cover-image", headers=headers)
    assert missing.status_code == 400


@pytest.mark.anyio
async def test_channel_profile_counts(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    viewer, headers = await user_with_headers()
    channel = await create_test_user(username="channelx")
    other = await create_test_user()
    db_session.add_all([
        Subscription(subscriber_id=viewer.id, channel_id=channel.id),
        Subscription(subscriber_id=other.id, channel_id=channel.id),
        Subscription(subscriber_id=channel.id, channel_id=other.id),
    ])
    await db_session.commit()

    resp = await async_client.get(f"{BASE}/channel/ChannelX", headers=headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["subscribersCount"] == 2
    assert data["channelsSubscribedToCount"] == 1
    assert data["isSubscribed"] is True

    missing = await async_client.get(f"{BASE}/channel/ghost", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Channel does not exist"


@pytest.mark.anyio
async def test_watch_history_newest_first(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    _viewer, headers = await user_with_headers()
    owner = await create_test_user()
    first = await create_video(db_session, owner, title="First")
    second = await create_video(db_session, owner, title="Second")

    await async_client.patch(f"/api/v1/videos/view/{first.id}", headers=headers)
    await async_client.patch(f"/api/v1/videos/view/{second.id}", headers=headers)

    resp = await async_client.get(f"{BASE}/watch-history", headers=headers)
    assert resp.status_code == 200
    titles = [v["title"] for v in resp.json()["data"]]
    assert titles == ["Second", "First"]
    assert resp.json()["data"][0]["owner"]["username"] == owner.username
