# tests/test_comments/test_comments.py
from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.utils.factory import create_comment, create_video
from vidtube.db.models.like import Like

BASE = "/api/v1/comments"


@pytest.mark.anyio
async def test_add_and_list_comments(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers, create_test_user
):
    owner = await create_test_user()
    user, headers = await user_with_headers()
    video = await create_video(db_session, owner)

    empty = await async_client.get(f"{BASE}/{video.id}", headers=headers)
    assert empty.status_code == 404
    assert empty.json()["message"] == "No comments found"

    for text in ("first", "second", "third"):
        resp = await async_client.post(f"{BASE}/{video.id}", json={"content": text}, headers=headers)
        assert resp.status_code == 201
        assert resp.json()["message"] == "Comment created successfully"
        assert resp.json()["data"]["video"] == str(video.id)
        assert resp.json()["data"]["owner"]["id"] == str(user.id)

    page = await async_client.get(f"{BASE}/{video.id}", params={"page": 1, "limit": 2}, headers=headers)
    assert page.status_code == 200
    data = page.json()["data"]
    assert data["total"] == 3
    assert [c["content"] for c in data["items"]] == ["third", "second"]


@pytest.mark.anyio
async def test_comment_requires_content_and_published_video(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers
):
    owner, headers = await user_with_headers()
    video = await create_video(db_session, owner)
    draft = await create_video(db_session, owner, is_published=False)

    blank = await async_client.post(f"{BASE}/{video.id}", json={"content": "   "}, headers=headers)
    assert blank.status_code == 400

    on_draft = await async_client.post(f"{BASE}/{draft.id}", json={"content": "hi"}, headers=headers)
    assert on_draft.status_code == 403

    list_draft = await async_client.get(f"{BASE}/{draft.id}", headers=headers)
    assert list_draft.status_code == 403


@pytest.mark.anyio
async def test_update_and_delete_owner_only(
    async_client: AsyncClient, db_session: AsyncSession, user_with_headers
):
    author, author_headers = await user_with_headers()
    _other, other_headers = await user_with_headers()
    video = await create_video(db_session, author)
    comment = await create_comment(db_session, video, author, "original")
    db_session.add(Like(liked_by_id=author.id, comment_id=comment.id))
    await db_session.commit()
    comment_id = comment.id

    forbidden = await async_client.patch(
        f"{BASE}/c/{comment_id}", json={"newContent": "hacked"}, headers=other_headers
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You are not authorized to perform this action"

    blank_by_other = await async_client.patch(
        f"{BASE}/c/{comment_id}", json={"newContent": "  "}, headers=other_headers
    )
    assert blank_by_other.status_code == 403
    blank_by_owner = await async_client.patch(
        f"{BASE}/c/{comment_id}", json={"newContent": "  "}, headers=author_headers
    )
    assert blank_by_owner.status_code == 400

    ok = await async_client.patch(f"{BASE}/c/{comment_id}", json={"newContent": "edited"}, headers=author_headers)
    assert ok.status_code == 200
    assert ok.json()["data"]["content"] == "edited"

    assert (await async_client.delete(f"{BASE}/c/{comment_id}", headers=other_headers)).status_code == 403

    deleted = await async_client.delete(f"{BASE}/c/{comment_id}", headers=author_headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Comment deleted successfully"
    likes = (await db_session.execute(select(func.count()).select_from(Like))).scalar_one()
    assert likes == 0

    missing = await async_client.patch(f"{BASE}/c/{comment_id}", json={"newContent": "x"}, headers=author_headers)
    assert missing.status_code == 404
