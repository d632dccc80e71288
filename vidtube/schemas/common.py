from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Reads ORM rows or snake_case dicts; serializes camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OwnerOut(CamelModel):
    """Public projection of a user embedded in other resources."""

    id: UUID
    username: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None


class Timestamped(CamelModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
