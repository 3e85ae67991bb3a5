"""Response envelope and pagination schemas shared by every router."""

import math
from typing import Any, Optional

from pydantic import BaseModel


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class Envelope(BaseModel):
    success: bool = True
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[str] = None


def envelope(data: Any = None, message: Optional[str] = None) -> dict:
    """Wrap a successful payload; pydantic models inside ``data`` are dumped."""
    body: dict = {"success": True}
    if data is not None:
        body["data"] = _dump(data)
    if message is not None:
        body["message"] = message
    return body


def error_envelope(message: str, error: str) -> dict:
    return Envelope(success=False, message=message, error=error).model_dump(exclude_none=True)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_dump(v) for v in value]
    return value
