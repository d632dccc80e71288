# vidtube/schemas/envelope.py
from __future__ import annotations

"""
Response envelope
=================

Every reply, success or failure, is shaped as::

    {"data": ..., "message": "...", "statusCode": 200, "success": true}

`success` is derived: `statusCode < 400`.
"""

from typing import Any, Generic, Optional, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, computed_field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(status.HTTP_200_OK, alias="statusCode")
    data: Optional[T] = None
    message: str = "Success"

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        return self.status_code < 400


def api_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render `data` inside the envelope as a JSONResponse (camelCase keys)."""
    envelope = ApiResponse[Any](status_code=status_code, data=jsonable_encoder(data), message=message)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(by_alias=True))


__all__ = ["ApiResponse", "api_response"]
