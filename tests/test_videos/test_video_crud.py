# tests/test_videos/test_video_crud.py
from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.fixtures.mocks.storage import CDN, MockS3
from tests.utils.factory import create_video

BASE = "/api/v1/videos"

MP4 = ("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")
JPG = ("thumb.jpg", b"\xff\xd8\xff\xe0jpeg", "image/jpeg")


# ─────────────────────────────────────────────────────────────
# Publish
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_publish_video(async_client: AsyncClient, user_with_headers, mock_storage: MockS3):
    user, headers = await user_with_headers()

    resp = await async_client.post(
        BASE,
        data={"title": " My clip ", "description": "About things", "tags": "python, fastapi,,"},
        files={"videoFile": MP4, "thumbnail": JPG},
        headers=headers,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Video published successfully"
    data = body["data"]
    assert data["title"] == "My clip"
    assert data["tags"] == ["python", "fastapi"]
    assert data["views"] == 0
    assert data["isPublished"] is True
    assert data["videoFile"].startswith(f"{CDN}/media/") and data["videoFile"].endswith(".mp4")
    assert data["owner"]["id"] == str(user.id)
    assert len(mock_storage.objects) == 2


@pytest.mark.anyio
async def test_publish_requires_fields_and_files(async_client: AsyncClient, user_with_headers):
    _user, headers = await user_with_headers()

    no_title = await async_client.post(
        BASE, data={"description": "d"}, files={"videoFile": MP4, "thumbnail": JPG}, headers=headers
    )
    assert no_title.status_code == 400

    no_thumb = await async_client.post(
        BASE, data={"title": "t", "description": "d"}, files={"videoFile": MP4}, headers=headers
    )
    assert no_thumb.status_code == 400


@pytest.mark.anyio
async def test_publish_upload_failure_is_500(
    async_client: AsyncClient, user_with_headers, mock_storage: MockS3, media_relay
):
    _user, headers = await user_with_headers()
    mock_storage.fail_uploads = True

    resp = await async_client.post(
        BASE, data={"title": "t", "description": "d"}, files={"videoFile": MP4, "thumbnail": JPG}, headers=headers
    )
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to upload media"
    assert list(media_relay.tmp_dir.iterdir()) == []


# ─────────────────────────────────────────────────────────────
# Browse / search
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_list_filters_and_paginates(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    _viewer, headers = await user_with_headers()
    owner = await create_test_user()
    other = await create_test_user()
    await create_video(db_session, owner, title="Learning Python", tags=["Python", "basics"])
    await create_video(db_session, owner, title="Cooking pasta", tags=["food"])
    await create_video(db_session, other, title="Advanced python tricks", tags=["python"])
    await create_video(db_session, owner, title="Hidden python draft", is_published=False)

    everything = await async_client.get(BASE, headers=headers)
    assert everything.status_code == 200
    assert everything.json()["message"] == "Videos fetched successfully"
    assert everything.json()["data"]["total"] == 3

    by_query = await async_client.get(BASE, params={"query": "PYTHON"}, headers=headers)
    assert {v["title"] for v in by_query.json()["data"]["items"]} == {"Learning Python", "Advanced python tricks"}

    by_tag = await async_client.get(BASE, params={"tag": "food"}, headers=headers)
    assert [v["title"] for v in by_tag.json()["data"]["items"]] == ["Cooking pasta"]

    by_owner = await async_client.get(BASE, params={"userId": str(owner.id)}, headers=headers)
    assert by_owner.json()["data"]["total"] == 2

    page = await async_client.get(
        BASE, params={"page": 2, "limit": 2, "sortBy": "title", "sortType": "asc"}, headers=headers
    )
    data = page.json()["data"]
    assert data["page"] == 2 and data["limit"] == 2 and data["total"] == 3
    assert [v["title"] for v in data["items"]] == ["Learning Python"]


@pytest.mark.anyio
async def test_list_with_no_match_is_404(async_client: AsyncClient, user_with_headers):
    _user, headers = await user_with_headers()

    resp = await async_client.get(BASE, params={"query": "nothing-matches"}, headers=headers)
    assert resp.status_code == 404
    body = resp.json()
    assert body == {
        "data": None,
        "message": "No videos found based on the query parameters",
        "statusCode": 404,
        "success": False,
        "requestId": body["requestId"],
    }


@pytest.mark.anyio
async def test_tag_filter_matches_tag_values(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers
):
    owner, headers = await user_with_headers()
    await create_video(db_session, owner, title="Paris", tags=["Café", "travel"])
    await create_video(db_session, owner, title="Charts", tags=["music"])

    accented = await async_client.get(BASE, params={"tag": "café"}, headers=headers)
    assert accented.status_code == 200
    assert [v["title"] for v in accented.json()["data"]["items"]] == ["Paris"]

    partial = await async_client.get(BASE, params={"tag": "MUS"}, headers=headers)
    assert [v["title"] for v in partial.json()["data"]["items"]] == ["Charts"]

    for punctuation in ('"', ",", "[", '", "'):
        resp = await async_client.get(BASE, params={"tag": punctuation}, headers=headers)
        assert resp.status_code == 404, punctuation


@pytest.mark.anyio
async def test_list_rejects_unknown_sort(async_client: AsyncClient, user_with_headers):
    _user, headers = await user_with_headers()
    resp = await async_client.get(BASE, params={"sortBy": "owner"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request payload"


# ─────────────────────────────────────────────────────────────
# Get / update / publish toggle
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_get_video_visibility(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers
):
    owner, owner_headers = await user_with_headers()
    _other, other_headers = await user_with_headers()
    draft = await create_video(db_session, owner, is_published=False)

    assert (await async_client.get(f"{BASE}/{draft.id}", headers=owner_headers)).status_code == 200
    assert (await async_client.get(f"{BASE}/{draft.id}", headers=other_headers)).status_code == 403
    assert (await async_client.get(f"{BASE}/{uuid4()}", headers=owner_headers)).status_code == 404
    assert (await async_client.get(f"{BASE}/not-a-uuid", headers=owner_headers)).status_code == 400


@pytest.mark.anyio
async def test_update_video_owner_only(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, mock_storage: MockS3
):
    owner, owner_headers = await user_with_headers()
    _other, other_headers = await user_with_headers()
    video = await create_video(db_session, owner, title="Before")
    old_thumb_id = video.thumbnail.rsplit("/", 1)[-1].split(".")[0]

    forbidden = await async_client.patch(f"{BASE}/{video.id}", data={"title": "Hijack"}, headers=other_headers)
    assert forbidden.status_code == 403

    empty = await async_client.patch(f"{BASE}/{video.id}", headers=owner_headers)
    assert empty.status_code == 400

    ok = await async_client.patch(
        f"{BASE}/{video.id}",
        data={"title": "After", "tags": "a,b"},
        files={"thumbnail": JPG},
        headers=owner_headers,
    )
    assert ok.status_code == 200
    data = ok.json()["data"]
    assert data["title"] == "After"
    assert data["tags"] == ["a", "b"]
    assert f"media/{old_thumb_id}" in mock_storage.deleted_prefixes


@pytest.mark.anyio
async def test_toggle_publish_status(async_client: AsyncClient, db_session: AsyncSession, user_with_headers):
    owner, headers = await user_with_headers()
    _other, other_headers = await user_with_headers()
    video = await create_video(db_session, owner)

    first = await async_client.patch(f"{BASE}/toggle-publish-status/{video.id}", headers=headers)
    assert first.status_code == 200
    assert first.json()["data"]["isPublished"] is False
    assert first.json()["message"] == "Video publish status updated successfully"

    second = await async_client.patch(f"{BASE}/toggle-publish-status/{video.id}", headers=headers)
    assert second.json()["data"]["isPublished"] is True

    forbidden = await async_client.patch(f"{BASE}/toggle-publish-status/{video.id}", headers=other_headers)
    assert forbidden.status_code == 403
