# tests/fixtures/app.py
"""
🧩 App Fixture:
- Builds the production app via `create_app()`
- Injects the test DB session and the in-memory media relay
- Returns an HTTP client fixture for integration tests
"""

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.fixtures.db import get_override_get_db
from vidtube.db.session import get_async_db
from vidtube.main import create_app
from vidtube.services.media_service import MediaRelay, get_media_relay


@pytest.fixture()
async def app(db_session: AsyncSession, media_relay: MediaRelay) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_async_db] = get_override_get_db(db_session)
    app.dependency_overrides[get_media_relay] = lambda: media_relay
    return app


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    🌐 HTTP client bound to the app.

    Auth cookies are `secure`, so the client never echoes them back over
    `http://test`; tests authenticate with Bearer headers.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


__all__ = ["app", "async_client"]
