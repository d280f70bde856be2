"""Troves schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TroveCreate(BaseModel):
    """Create trove request."""

    title: str = Field(min_length=1, max_length=255)
    description: str = ""


class TroveUpdate(BaseModel):
    """Update trove request."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class TroveRead(BaseModel):
    """Trove response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
