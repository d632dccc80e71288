from __future__ import annotations

"""Request-validation guards shared by the resource services."""

from typing import Any, Optional, TypeVar
from uuid import UUID

from fastapi import status
from pydantic import EmailStr, TypeAdapter, ValidationError

from vidtube.core.exceptions import ApiError

T = TypeVar("T")

_email_adapter = TypeAdapter(EmailStr)

NOT_OWNER = "You are not allowed to perform this action"


def clean(value: Optional[str]) -> str:
    return (value or "").strip()


def require_text(value: Optional[str], message: str) -> str:
    """Trimmed value, or 400 when empty/missing."""
    text = clean(value)
    if not text:
        raise ApiError(status.HTTP_400_BAD_REQUEST, message)
    return text


def require_found(entity: Optional[T], message: str) -> T:
    if entity is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, message)
    return entity


def ensure_owner(owner_id: Any, user_id: UUID, message: str = NOT_OWNER) -> None:
    if owner_id != user_id:
        raise ApiError(status.HTTP_403_FORBIDDEN, message)


def normalize_email(value: str) -> str:
    """Lower-cased, syntax-checked email; 400 otherwise."""
    try:
        return str(_email_adapter.validate_python(value.strip())).lower()
    except ValidationError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Please provide a valid email address")


def normalize_username(value: str) -> str:
    return "".join(value.split()).lower()
