"""Profile fields schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileFieldUpdate(BaseModel):
    """Partial update of a user's own field copy."""

    field_name: str | None = Field(default=None, min_length=1, max_length=100)
    is_required: bool | None = None
    is_searchable: bool | None = None
    is_public: bool | None = None
    default_value: str | None = None
    display_order: int | None = None
    icon: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=500)


class ProfileFieldRead(BaseModel):
    """Profile field response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    field_key: str
    field_name: str
    field_type: str
    is_system: bool
    is_required: bool
    is_searchable: bool
    is_public: bool
    default_value: str
    options: str
    validation: str
    display_order: int
    icon: str
    description: str
    created_at: datetime
    updated_at: datetime
