from __future__ import annotations

"""Tweet service: create, list by username, edit and delete short posts."""

from typing import List
from uuid import UUID

from fastapi import status
from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.exceptions import ApiError
from vidtube.db.models.like import Like
from vidtube.db.models.tweet import Tweet
from vidtube.db.models.user import User
from vidtube.schemas.tweet import TweetOut
from vidtube.utils.validation_utils import (
    clean,
    ensure_owner,
    normalize_username,
    require_found,
    require_text,
)


async def _get_tweet_or_404(db: AsyncSession, tweet_id: UUID) -> Tweet:
    tweet = (await db.execute(select(Tweet).where(Tweet.id == tweet_id))).scalars().first()
    return require_found(tweet, "Tweet not found")


async def create_tweet(db: AsyncSession, user: User, content: str | None) -> TweetOut:
    tweet = Tweet(content=require_text(content, "Content is required"), owner_id=user.id)
    db.add(tweet)
    await db.commit()
    await db.refresh(tweet)
    return TweetOut.model_validate(tweet)


async def get_user_tweets(db: AsyncSession, username: str | None) -> List[TweetOut]:
    name = normalize_username(clean(username))
    if not name:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Username is required")
    owner = require_found(
        (await db.execute(select(User).where(User.username == name))).scalars().first(),
        "User not found",
    )
    stmt = select(Tweet).where(Tweet.owner_id == owner.id).order_by(desc(Tweet.created_at))
    tweets = (await db.execute(stmt)).scalars().all()
    if not tweets:
        raise ApiError(status.HTTP_404_NOT_FOUND, "No tweets found")
    return [TweetOut.model_validate(t) for t in tweets]


async def update_tweet(db: AsyncSession, user: User, tweet_id: UUID, new_content: str | None) -> TweetOut:
    tweet = await _get_tweet_or_404(db, tweet_id)
    ensure_owner(tweet.owner_id, user.id)
    text = require_text(new_content, "Content is required")

    tweet.content = text
    await db.commit()
    await db.refresh(tweet)
    return TweetOut.model_validate(tweet)


async def delete_tweet(db: AsyncSession, user: User, tweet_id: UUID) -> TweetOut:
    tweet = await _get_tweet_or_404(db, tweet_id)
    ensure_owner(tweet.owner_id, user.id)

    deleted = TweetOut.model_validate(tweet)
    await db.execute(delete(Like).where(Like.tweet_id == tweet.id))
    await db.execute(delete(Tweet).where(Tweet.id == tweet.id))
    await db.commit()
    return deleted
