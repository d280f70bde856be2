"""Weapons ORM models."""

from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin, SoftDeleteMixin


class Weapon(BaseModelMixin, SoftDeleteMixin, Base):
    """Weapon catalog entry."""

    __tablename__ = "weapons"

    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    type: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    story: Mapped[str] = mapped_column(Text, default="", nullable=False)
