# vidtube/security_headers.py
from __future__ import annotations

"""
# VidTube — CORS & cache helpers

- **CORS installer**: strict allow-list from `CORS_ORIGIN` (CSV), credentials on
  so the browser sends the auth cookies.
- **Cache helper**: `set_sensitive_cache()` for responses carrying tokens.

## Quick start
    from vidtube.security_headers import configure_cors, set_sensitive_cache

    configure_cors(app)

    @router.post("/login")
    async def login(...):
        response = JSONResponse(...)
        set_sensitive_cache(response)
"""

from typing import Iterable, Optional

from fastapi import Response
from starlette.middleware.cors import CORSMiddleware

from vidtube.core.config import settings


# ─────────────────────────────────────────────────────────────
# 🗄️ Cache helper
# ─────────────────────────────────────────────────────────────
def set_sensitive_cache(response: Response, *, seconds: int = 0) -> None:
    """
    Mark a response as sensitive for caching.

    `seconds > 0` enables a short **private** cache and adds
    `Vary: Authorization, Cookie` to prevent proxy leakage.
    """
    if seconds <= 0:
        response.headers["Cache-Control"] = "no-store"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return

    response.headers["Cache-Control"] = f"private, max-age={seconds}"
    needed = {"Authorization", "Cookie"}
    vary = response.headers.get("Vary")
    existing = {v.strip() for v in vary.split(",") if v.strip()} if vary else set()
    response.headers["Vary"] = ", ".join(sorted(existing | needed))


# ─────────────────────────────────────────────────────────────
# 🌐 CORS installer (allow-list, not '*')
# ─────────────────────────────────────────────────────────────
def configure_cors(
    app,
    *,
    allow_credentials: bool = True,
    allow_methods: Optional[Iterable[str]] = None,
    allow_headers: Optional[Iterable[str]] = None,
) -> None:
    """Install CORS from `settings.CORS_ORIGIN`."""
    allow_methods = allow_methods or ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]
    allow_headers = allow_headers or ["Authorization", "Content-Type", "X-Request-ID"]

    origins = settings.cors_origins_list or [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=list(allow_methods),
        allow_headers=list(allow_headers),
        expose_headers=["X-Request-ID"],
        max_age=3600,
    )


__all__ = ["configure_cors", "set_sensitive_cache"]
