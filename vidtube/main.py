# vidtube/main.py
from __future__ import annotations

"""
# VidTube API — Application Entrypoint (FastAPI)

App factory and lifecycle for the VidTube video-sharing backend.

## Wiring
- **Middleware order**: request id → CORS.
- **Exception handlers**: every error leaves as the `{data, message, statusCode, success}` envelope.
- **Routers**: the aggregated v1 router under `settings.API_V1_STR`.

## Probes
- `/healthz`: liveness (process up).
- `/readyz`: readiness (`SELECT 1` against the database).
- `/api/v1/health-check`: versioned liveness in the response envelope.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

# Importing configures Loguru and the stdlib intercept.
from vidtube.core import logger as _logsetup  # noqa: F401
from vidtube.api.v1.routers import router as api_v1_router
from vidtube.core.config import settings
from vidtube.core.exception_handlers import (
    app_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from vidtube.core.exceptions import AppException
from vidtube.db.session import async_engine, db_healthcheck
from vidtube.middleware.request_id import RequestIDMiddleware
from vidtube.security_headers import configure_cors

logger = logging.getLogger("vidtube")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup:
        - Log a banner and probe the database (a failed probe is logged, not fatal).

    Shutdown:
        - Dispose the async engine.
    """
    logger.info("✅ VidTube API starting up (env=%s)", settings.ENV)
    if await db_healthcheck():
        logger.info("🔌 Database reachable")
    else:
        logger.warning("Database not reachable at startup")

    try:
        yield
    finally:
        await async_engine.dispose()
        logger.info("🛑 Database engine disposed")
        logger.info("🛑 VidTube API shutting down")


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app() -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Returns:
        FastAPI: application with middleware, exception handlers, routers
        and health/readiness endpoints.
    """
    enable_docs = settings.ENABLE_DOCS
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/docs" if enable_docs else None,
        redoc_url="/redoc" if enable_docs else None,
        openapi_url="/openapi.json" if enable_docs else None,
        lifespan=lifespan,
    )

    # ── Middlewares (order matters) ─────────────────────────────────────────
    app.add_middleware(RequestIDMiddleware)
    configure_cors(app)

    # ── Exception handlers ──────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)  # type: ignore[arg-type]

    # ── Routers (versioned API) ─────────────────────────────────────────────
    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """Liveness probe. No external checks."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    async def readyz() -> JSONResponse:
        db_ok = await db_healthcheck()
        return JSONResponse(
            {"ready": db_ok, "checks": {"db": db_ok}},
            status_code=200 if db_ok else 503,
        )

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        return JSONResponse(
            {"name": settings.PROJECT_NAME, "docs": app.docs_url or "", "version": settings.VERSION}
        )

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()
__all__ = ["create_app", "app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("vidtube.main:app", host="0.0.0.0", port=8000, reload=settings.ENV == "development")
