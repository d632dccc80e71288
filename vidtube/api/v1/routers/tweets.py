# vidtube/api/v1/routers/tweets.py
from __future__ import annotations

"""
Tweets API — VidTube

POST   /tweets                  {content}
GET    /tweets/user/{username}
PATCH  /tweets/{tweetId}        {newContent}
DELETE /tweets/{tweetId}
"""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import get_current_user
from vidtube.db.models.user import User
from vidtube.db.session import get_async_db
from vidtube.schemas.envelope import api_response
from vidtube.schemas.tweet import TweetCreate, TweetUpdate
from vidtube.services import tweet_service

router = APIRouter(prefix="/tweets", tags=["Tweets"], dependencies=[Depends(get_current_user)])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Post a tweet")
async def create_tweet(
    payload: TweetCreate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    tweet = await tweet_service.create_tweet(db, current_user, payload.content)
    return api_response(tweet, "Tweet created successfully", status.HTTP_201_CREATED)


@router.get("/user/{username}", summary="A user's tweets, newest first")
async def user_tweets(
    username: str,
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    tweets = await tweet_service.get_user_tweets(db, username)
    return api_response(tweets, "Tweets retrieved successfully")


@router.patch("/{tweet_id}", summary="Edit own tweet")
async def update_tweet(
    tweet_id: UUID,
    payload: TweetUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    tweet = await tweet_service.update_tweet(db, current_user, tweet_id, payload.new_content)
    return api_response(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}", summary="Delete own tweet")
async def delete_tweet(
    tweet_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> JSONResponse:
    deleted = await tweet_service.delete_tweet(db, current_user, tweet_id)
    return api_response({"deletedTweet": deleted}, "Tweet deleted successfully")


__all__ = ["router"]
