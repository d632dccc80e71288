# vidtube/api/v1/routers/healthcheck.py
from __future__ import annotations

"""Liveness probe inside the versioned API; no external checks."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from vidtube.schemas.envelope import api_response

router = APIRouter(tags=["Health"])


@router.get("/health-check", summary="API liveness")
async def health_check() -> JSONResponse:
    return api_response("success", "API is up and running")


__all__ = ["router"]
