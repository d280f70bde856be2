"""Field templates ORM models."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin, SoftDeleteMixin
from app.modules.profile_fields.models import ProfileField

# Attributes copied verbatim into a user's ProfileField when a template is applied.
SNAPSHOT_ATTRIBUTES: tuple[str, ...] = (
    "field_key",
    "field_name",
    "field_type",
    "is_required",
    "is_searchable",
    "is_public",
    "default_value",
    "options",
    "validation",
    "display_order",
    "icon",
    "description",
)


class ProfileFieldTemplate(BaseModelMixin, SoftDeleteMixin, Base):
    """System-owned definition of a profile field users can adopt."""

    __tablename__ = "profile_field_templates"

    field_key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    field_name: Mapped[str] = mapped_column(String(100), nullable=False)
    field_type: Mapped[str] = mapped_column(String(50), nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_searchable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    default_value: Mapped[str] = mapped_column(Text, default="", nullable=False)
    options: Mapped[str] = mapped_column(Text, default="", nullable=False)
    validation: Mapped[str] = mapped_column(Text, default="", nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    icon: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    description: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    default_unlock_rules: Mapped[str] = mapped_column(Text, default="", nullable=False)
    category: Mapped[str] = mapped_column(String(50), default="", index=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def to_profile_field(self, user_id: int) -> ProfileField:
        """Build an unsaved ProfileField holding a copy of this template's values."""
        values = {name: getattr(self, name) for name in SNAPSHOT_ATTRIBUTES}
        return ProfileField(user_id=user_id, is_system=True, **values)
