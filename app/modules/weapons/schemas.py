"""Weapons schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WeaponCreate(BaseModel):
    """Create weapon request."""

    name: str = Field(min_length=1, max_length=50)
    level: int = Field(default=1, ge=1)
    content: str = ""
    type: int = Field(default=1, ge=1)
    story: str = ""


class WeaponUpdate(BaseModel):
    """Update weapon request."""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    level: int | None = Field(default=None, ge=1)
    content: str | None = None
    type: int | None = Field(default=None, ge=1)
    story: str | None = None


class WeaponRead(BaseModel):
    """Weapon response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    level: int
    content: str
    type: int
    story: str
    created_at: datetime
    updated_at: datetime
