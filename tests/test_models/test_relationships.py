# tests/test_models/test_relationships.py
import pytest
from sqlalchemy import select
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.ext.asyncio import AsyncSession

from tests.utils.factory import create_video
from vidtube.db.models.like import Like
from vidtube.db.models.subscription import Subscription
from vidtube.db.models.user import User
from vidtube.db.models.watch_history import WatchHistoryEntry

BACK_REFERENCES = [
    User.videos,
    User.watch_history,
    Like.video,
    Like.comment,
    Like.tweet,
    Subscription.subscriber,
    Subscription.channel,
    WatchHistoryEntry.user,
    WatchHistoryEntry.video,
]


@pytest.mark.parametrize("attr", BACK_REFERENCES, ids=lambda a: str(a))
def test_back_references_never_load_implicitly(attr):
    assert attr.property.lazy == "raise"


@pytest.mark.anyio
async def test_touching_an_unloaded_back_reference_raises(db_session: AsyncSession, create_test_user):
    owner = await create_test_user()
    video = await create_video(db_session, owner)
    db_session.add(Like(liked_by_id=owner.id, video_id=video.id))
    await db_session.commit()
    db_session.expunge_all()

    like = (await db_session.execute(select(Like))).scalar_one()
    with pytest.raises(InvalidRequestError):
        _ = like.video
