from __future__ import annotations

"""
Envelope exception handlers.

Registered in `vidtube.main.create_app`. Every error leaves the API as
`{data: null, message, statusCode, success: false}`.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidtube.core.exceptions import AppException
from vidtube.middleware.request_id import get_request_id


def _envelope(
    status_code: int,
    message: str,
    request: Request,
    *,
    errors: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {
        "data": None,
        "message": message,
        "statusCode": status_code,
        "success": False,
    }
    if errors is not None:
        body["errors"] = jsonable_encoder(errors)
    rid = get_request_id(request)
    if rid:
        body["requestId"] = rid
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:  # type: ignore
    if exc.status_code >= 500:
        logger.error("{} {} -> {} {}", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_envelope(request_id=get_request_id(request))),
        headers=getattr(exc, "headers", None),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _envelope(exc.status_code, detail, request, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request payload",
        request,
        errors=exc.errors(),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", request)


__all__ = [
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "global_exception_handler",
]
