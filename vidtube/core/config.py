# vidtube/core/config.py
from __future__ import annotations

"""
# VidTube — Centralized Configuration (Pydantic v2)

Single `settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- Distinct signing secrets for access and refresh tokens.
- Optional object storage so imports never crash in dev.

## Usage
    from vidtube.core.config import settings
"""

import logging
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)
load_dotenv()


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _split_csv(v: str | None) -> list[str]:
    """Split a comma-separated string into a trimmed list (empty-safe)."""
    if not v:
        return []
    return [s.strip() for s in str(v).split(",") if s and s.strip()]


def _normalize_url_like(v: str | None) -> str:
    """Normalize to an https URL string without trailing slash."""
    s = (v or "").strip()
    if not s:
        return ""
    if not (s.startswith("http://") or s.startswith("https://")):
        s = "https://" + s
    return s.rstrip("/")


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Security:
        - Access and refresh tokens are signed with separate secrets.
        - Auth cookies are http-only; `COOKIE_SECURE` stays on outside local dev.

    Notes:
        - `DATABASE_URL` overrides the composed PostgreSQL DSN when set.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "VidTube API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENV: Literal["development", "staging", "production", "test"] = "development"
    ENABLE_DOCS: bool = True

    # ── Security / JWT ────────────────────────────────────────
    ACCESS_TOKEN_SECRET: SecretStr = Field(SecretStr("change-me-access"))
    REFRESH_TOKEN_SECRET: SecretStr = Field(SecretStr("change-me-refresh"))
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24, ge=1, le=7 * 24 * 60)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(10, ge=1, le=365)

    # ── Cookies ───────────────────────────────────────────────
    COOKIE_SECURE: bool = True
    COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "none"

    # ── Database (PostgreSQL) ─────────────────────────────────
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = Field(SecretStr("postgres"))
    POSTGRES_DB: str = "vidtube"
    DATABASE_URL_OVERRIDE: Optional[str] = Field(None, alias="DATABASE_URL")
    DB_ECHO: bool = False

    # ── CORS ──────────────────────────────────────────────────
    CORS_ORIGIN: Optional[str] = "http://localhost:5173"  # CSV

    # ── Object storage (optional in dev) ──────────────────────
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[SecretStr] = None
    AWS_REGION: str = "us-east-1"
    AWS_BUCKET_NAME: Optional[str] = None
    AWS_S3_ENDPOINT_URL: Optional[str] = None  # MinIO / localstack
    CDN_BASE_URL: Optional[str] = None

    # ── Uploads ───────────────────────────────────────────────
    UPLOAD_TMP_DIR: Path = Path("public/temp")
    FFPROBE_BINARY: str = "ffprobe"

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("CORS_ORIGIN", mode="before")
    @classmethod
    def _normalize_cors_csv(cls, v):
        return None if v is None else ",".join(_split_csv(str(v)))

    @field_validator("CDN_BASE_URL", mode="before")
    @classmethod
    def _normalize_cdn(cls, v: str | None) -> str | None:
        s = _normalize_url_like(v)
        return s or None

    # ── Derived / convenience properties ─────────────────────
    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENV.lower() == "development"

    @property
    def DATABASE_URL(self) -> str:
        """Sync DSN."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """Async SQLAlchemy DSN."""
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def cors_origins_list(self) -> List[str]:
        return _split_csv(self.CORS_ORIGIN)


# Singleton instance
settings = Settings()
