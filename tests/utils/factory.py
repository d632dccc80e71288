# tests/utils/factory.py

from typing import List, Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from tests.utils.faker import fake
from vidtube.core.security import get_password_hash
from vidtube.db.models.comment import Comment
from vidtube.db.models.tweet import Tweet
from vidtube.db.models.user import User
from vidtube.db.models.video import Video


async def create_user(
    session: AsyncSession,
    *,
    username: Optional[str] = None,
    email: Optional[str] = None,
    password: str = "password",
    full_name: Optional[str] = None,
) -> User:
    """✅ Insert a user directly (bypasses the media relay)."""
    suffix = uuid4().hex[:8]
    user = User(
        username=(username or f"user_{suffix}").lower(),
        email=(email or f"user_{suffix}@example.com").lower(),
        full_name=full_name or fake.name(),
        avatar=f"https://cdn.example.com/media/{uuid4().hex}.png",
        password=get_password_hash(password),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_video(
    session: AsyncSession,
    owner: User,
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    is_published: bool = True,
    duration: float = 12.5,
) -> Video:
    video = Video(
        title=title or fake.sentence(nb_words=4),
        description=description or fake.paragraph(nb_sentences=2),
        tags=tags if tags is not None else [],
        video_file=f"https://cdn.example.com/media/{uuid4().hex}.mp4",
        thumbnail=f"https://cdn.example.com/media/{uuid4().hex}.png",
        duration=duration,
        is_published=is_published,
        owner_id=owner.id,
    )
    session.add(video)
    await session.commit()
    await session.refresh(video)
    return video


async def create_comment(session: AsyncSession, video: Video, owner: User, content: Optional[str] = None) -> Comment:
    comment = Comment(content=content or fake.sentence(), video_id=video.id, owner_id=owner.id)
    session.add(comment)
    await session.commit()
    await session.refresh(comment)
    return comment


async def create_tweet(session: AsyncSession, owner: User, content: Optional[str] = None) -> Tweet:
    tweet = Tweet(content=content or fake.sentence(), owner_id=owner.id)
    session.add(tweet)
    await session.commit()
    await session.refresh(tweet)
    return tweet
