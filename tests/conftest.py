# tests/conftest.py
"""
Global test bootstrap
- Points settings at an in-memory SQLite database BEFORE the app is imported
- Quiets logging
- Pulls in the shared fixtures (db, app, storage, users, auth)
"""

from __future__ import annotations

import os
import warnings

from sqlalchemy.exc import SAWarning

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (must be set before importing anything from `vidtube`)
# ──────────────────────────────────────────────────────────────────────────────
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_TO_FILE", "0")

warnings.filterwarnings("ignore", category=SAWarning)

# ──────────────────────────────────────────────────────────────────────────────
# 📦 Fixtures
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *               # noqa: E402,F401,F403
from tests.fixtures.mocks.storage import *    # noqa: E402,F401,F403
from tests.fixtures.app import *              # noqa: E402,F401,F403
from tests.fixtures.users import *            # noqa: E402,F401,F403
from tests.fixtures.auth import *             # noqa: E402,F401,F403
