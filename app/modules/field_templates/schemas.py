"""Field templates schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import FieldTypeEnum


class FieldTemplateCreate(BaseModel):
    """Create field template request."""

    field_key: str = Field(min_length=1, max_length=100)
    field_name: str = Field(min_length=1, max_length=100)
    field_type: FieldTypeEnum
    is_required: bool = False
    is_searchable: bool = False
    is_public: bool = False
    default_value: str = ""
    options: str = ""
    validation: str = ""
    display_order: int = 0
    icon: str = Field(default="", max_length=500)
    description: str = Field(default="", max_length=500)
    default_unlock_rules: str = ""
    category: str = Field(default="", max_length=50)


class FieldTemplateUpdate(BaseModel):
    """Partial update: None and empty strings leave the stored value as is."""

    field_name: str | None = Field(default=None, max_length=100)
    field_type: FieldTypeEnum | None = None
    is_required: bool | None = None
    is_searchable: bool | None = None
    is_public: bool | None = None
    default_value: str | None = None
    options: str | None = None
    validation: str | None = None
    display_order: int | None = None
    icon: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=500)
    default_unlock_rules: str | None = None
    category: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None


class FieldTemplateRead(BaseModel):
    """Field template response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    field_key: str
    field_name: str
    field_type: str
    is_required: bool
    is_searchable: bool
    is_public: bool
    default_value: str
    options: str
    validation: str
    display_order: int
    icon: str
    description: str
    default_unlock_rules: str
    category: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ApplyTemplateRequest(BaseModel):
    """Apply one template (id from path) to a user."""

    user_id: int = Field(gt=0)


class ApplyTemplatesRequest(BaseModel):
    """Apply several templates to a user."""

    template_ids: list[int]
    user_id: int = Field(gt=0)


class ApplyTemplateResult(BaseModel):
    """Field created by a successful application."""

    field_id: int
    field_key: str
    field_name: str
    message: str


class ApplyItemOutcome(BaseModel):
    """Outcome of one template id inside a batch."""

    template_id: int
    succeeded: bool
    field_id: int | None = None
    error: str | None = None


class ApplyTemplatesResult(BaseModel):
    """Aggregate result of a best-effort batch application."""

    applied_fields: list[ApplyTemplateResult] = Field(default_factory=list)
    items: list[ApplyItemOutcome] = Field(default_factory=list)
    total_count: int = 0
    success_count: int = 0
    failed_count: int = 0
    message: str = ""
