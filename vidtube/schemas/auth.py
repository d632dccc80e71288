# vidtube/schemas/auth.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from vidtube.schemas.common import CamelModel
from vidtube.schemas.user import UserOut


# ──────────────── Login ────────────────
class LoginRequest(BaseModel):
    """`usernameOrEmail` is preferred; plain `username` / `email` also work."""

    model_config = ConfigDict(populate_by_name=True)

    username_or_email: Optional[str] = Field(None, alias="usernameOrEmail")
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @property
    def identifier(self) -> str:
        return (self.username_or_email or self.username or self.email or "").strip()


# ──────────────── Refresh ────────────────
class RefreshRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: Optional[str] = Field(None, alias="refreshToken")


# ──────────────── Responses ────────────────
class AuthTokensOut(CamelModel):
    access_token: str
    refresh_token: str


class LoginOut(AuthTokensOut):
    user: UserOut
