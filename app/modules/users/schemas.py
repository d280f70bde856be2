"""Users schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.enums import UserStatusEnum


class UserCreate(BaseModel):
    """Create user request."""

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr = Field(max_length=100)
    nickname: str = Field(default="", max_length=50)
    avatar: str = Field(default="", max_length=255)


class UserUpdate(BaseModel):
    """Update user request."""

    nickname: str | None = Field(default=None, max_length=50)
    avatar: str | None = Field(default=None, max_length=255)
    status: UserStatusEnum | None = None


class UserRead(BaseModel):
    """User output schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    nickname: str
    avatar: str
    status: int
    created_at: datetime
    updated_at: datetime
