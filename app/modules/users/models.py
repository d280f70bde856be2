"""Users ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, BaseModelMixin, SoftDeleteMixin
from app.core.enums import UserStatusEnum

if TYPE_CHECKING:
    from app.modules.profile_fields.models import ProfileField


class User(BaseModelMixin, SoftDeleteMixin, Base):
    """Platform user model."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    nickname: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    avatar: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    status: Mapped[int] = mapped_column(Integer, default=UserStatusEnum.ACTIVE, nullable=False)

    profile_fields: Mapped[list["ProfileField"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )
