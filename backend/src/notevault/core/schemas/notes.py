"""
Note management schemas.

Updates are partial: only fields the client actually sent are applied,
determined from ``model_fields_set`` rather than from None values.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from .common import ApiModel


class NoteCreate(ApiModel):
    """Note creation request schema."""

    title: str = Field(max_length=200, description="Note title, required")
    content: Optional[str] = Field(default="", description="Note content")
    color: Optional[str] = Field(default=None, max_length=32, description="Display color")
    category: Optional[str] = Field(default=None, max_length=50, description="Category label")
    is_pinned: bool = Field(default=False)
    is_favorite: bool = Field(default=False)

    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "example": {
                "title": "Groceries",
                "content": "eggs, milk",
                "color": "#fff475",
                "category": "Personal",
            }
        }
    }


class NoteUpdate(ApiModel):
    """Partial note update; omitted fields keep their value."""

    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=32)
    category: Optional[str] = Field(default=None, max_length=50)
    is_pinned: Optional[bool] = None
    is_favorite: Optional[bool] = None
    is_archived: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [name for name in self.model_fields_set if getattr(self, name) is None]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return self

    def changes(self) -> Dict[str, Any]:
        """Only the fields present in the request."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class ArchiveRequest(ApiModel):
    archived: bool = Field(default=True, description="Archive (true) or restore (false)")


class NoteResponse(ApiModel):
    """Note response schema."""

    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    content: str
    color: str
    category: str
    is_pinned: bool
    is_favorite: bool
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class NoteListResponse(ApiModel):
    """Ordered notes: pinned first, then newest first."""

    items: List[NoteResponse]
    total: int
