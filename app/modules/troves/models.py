"""Troves ORM models."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin, SoftDeleteMixin


class Trove(BaseModelMixin, SoftDeleteMixin, Base):
    """Saved collection item."""

    __tablename__ = "troves"

    title: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
