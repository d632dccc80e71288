# vidtube/core/exceptions.py
from __future__ import annotations

"""
VidTube — Application Exceptions
================================
A small layer on top of FastAPI/Starlette's `HTTPException` that carries the
metadata our envelope handlers need (`vidtube.core.exception_handlers`).

Key ideas
---------
- One base `AppException` with `message`, `code`, `errors` and `headers`.
- `ApiError` is the single typed failure raised by services and routers.
- `to_envelope()` renders the canonical `{data, message, statusCode, success}` body.

Usage
-----
    raise ApiError(404, "Video not found")
    raise ApiError(400, "Invalid request payload", errors=[...])
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "ApiError",
    "InvalidTokenException",
]


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception with optional metadata.

    Attributes
    -----------
    status_code : int
        HTTP status code (400/401/403/404/409/500).
    message : str
        Human-readable error message (also serialized as `detail`).
    code : int
        Internal error code. Defaults to `status_code`.
    errors : list | dict | None
        Machine-readable details (e.g. validation errors).
    headers : dict | None
        Optional headers (e.g. `{"WWW-Authenticate": "Bearer"}`).
    """

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        code: Optional[int] = None,
        errors: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code: int = int(code or status_code)
        self.message: str = message
        self.errors: Optional[Any] = errors

    # ── [Helper] Canonical body used by handlers ───────────────────────────
    def to_envelope(self, *, request_id: Optional[str] = None) -> Dict[str, Any]:
        """Return the failure envelope for this error."""
        body: Dict[str, Any] = {
            "data": None,
            "message": self.message,
            "statusCode": self.status_code,
            "success": False,
        }
        if self.errors is not None:
            body["errors"] = self.errors
        if request_id:
            body["requestId"] = request_id
        return body


# ──────────────────────────────────────────────────────────────
# 🚨 ApiError: the one error signal handlers raise
# ──────────────────────────────────────────────────────────────
class ApiError(AppException):
    """Typed failure with an HTTP status and a message.

    Positional form mirrors how handlers read: ``ApiError(403, "...")``.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        message: str = "Something went wrong",
        *,
        errors: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(
            status_code=status_code,
            message=message,
            errors=errors,
            headers=headers,
        )

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.message!r})"


# ──────────────────────────────────────────────────────────────
# 🔑 Auth/Token exceptions
# ──────────────────────────────────────────────────────────────
class InvalidTokenException(ApiError):
    """Raised for missing, invalid or expired tokens (401)."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )
