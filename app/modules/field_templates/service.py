"""Field templates business logic layer.

Templates are system-owned; applying one to a user copies its values into a
new ProfileField row. The copy is a snapshot: later template edits do not
reach fields that were already created.
"""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.core.metrics import record_template_application
from app.modules.field_templates.models import ProfileFieldTemplate
from app.modules.field_templates.repository import FieldTemplatesRepository
from app.modules.field_templates.schemas import (
    ApplyItemOutcome,
    ApplyTemplateResult,
    ApplyTemplatesResult,
    FieldTemplateCreate,
    FieldTemplateUpdate,
)
from app.modules.profile_fields.repository import ProfileFieldsRepository
from app.modules.users.repository import UsersRepository
from app.shared.exceptions import (
    AppException,
    BusinessRuleException,
    ConflictException,
    InternalException,
    NotFoundException,
    ValidationException,
)
from app.shared.pagination import PageRequest
from app.shared.utils import is_json_object

logger = logging.getLogger(__name__)

JSON_FIELDS = ("options", "validation", "default_unlock_rules")


def validate_json_fields(values: dict) -> None:
    """Non-empty JSON-bearing fields must decode to JSON objects."""
    for name in JSON_FIELDS:
        raw = values.get(name)
        if raw and not is_json_object(raw):
            raise ValidationException(f"{name} must be a valid JSON object")


class FieldTemplatesService:
    """Field template domain service."""

    def __init__(
        self,
        repository: FieldTemplatesRepository,
        fields_repository: ProfileFieldsRepository,
        users_repository: UsersRepository,
    ) -> None:
        self.repository = repository
        self.fields_repository = fields_repository
        self.users_repository = users_repository

    async def create_template(self, payload: FieldTemplateCreate) -> ProfileFieldTemplate:
        """Create an active template with a unique field key."""
        # Soft-deleted rows still hold the unique field_key index.
        existing = await self.repository.get_template_by_field_key(payload.field_key, include_deleted=True)
        if existing is not None:
            raise ConflictException(f"Field template with key '{payload.field_key}' already exists")

        values = payload.model_dump()
        validate_json_fields(values)
        values["is_active"] = True

        try:
            template = await self.repository.create_template(**values)
        except IntegrityError as exc:
            raise ConflictException(
                f"Field template with key '{payload.field_key}' already exists",
            ) from exc
        logger.info("Field template created: id=%s key=%s", template.id, template.field_key)
        return template

    async def get_template(self, template_id: int) -> ProfileFieldTemplate:
        template = await self.repository.get_template_by_id(template_id)
        if template is None:
            raise NotFoundException("Field template not found")
        return template

    async def get_template_by_field_key(self, field_key: str) -> ProfileFieldTemplate:
        template = await self.repository.get_template_by_field_key(field_key)
        if template is None:
            raise NotFoundException("Field template not found")
        return template

    async def update_template(self, template_id: int, payload: FieldTemplateUpdate) -> ProfileFieldTemplate:
        """Overwrite only the fields given with a non-empty value."""
        template = await self.get_template(template_id)

        changes = {
            key: value
            for key, value in payload.model_dump(exclude_none=True).items()
            if value != ""
        }
        validate_json_fields(changes)
        return await self.repository.update_template(template, **changes)

    async def delete_template(self, template_id: int) -> None:
        """Soft-delete a live template."""
        template = await self.get_template(template_id)
        await self.repository.soft_delete_template(template)
        logger.info("Field template deleted: id=%s key=%s", template.id, template.field_key)

    async def list_templates(
        self,
        page_request: PageRequest,
        *,
        category: str | None = None,
        field_type: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[ProfileFieldTemplate], int]:
        return await self.repository.list_templates(
            page_request,
            category=category,
            field_type=field_type,
            is_active=is_active,
        )

    async def list_templates_by_category(self, category: str) -> list[ProfileFieldTemplate]:
        return await self.repository.list_active_by_category(category)

    async def apply_template_to_user(self, template_id: int, user_id: int) -> ApplyTemplateResult:
        """Create the user's copy of a template."""
        try:
            template = await self.repository.get_template_by_id(template_id)
            if template is None:
                record_template_application("not_found")
                raise NotFoundException("Field template not found")

            if not template.is_active:
                record_template_application("inactive")
                raise BusinessRuleException("Field template is not active")

            user = await self.users_repository.get_user_by_id(user_id)
            if user is None:
                record_template_application("user_not_found")
                raise NotFoundException("User not found")

            existing = await self.fields_repository.get_field_by_user_and_key(user_id, template.field_key)
        except SQLAlchemyError as exc:
            record_template_application("error")
            raise InternalException.wrap("load field template", exc) from exc

        if existing is not None:
            record_template_application("duplicate")
            raise ConflictException(
                f"Field template already applied to user, field id: {existing.id}",
            )

        try:
            field = await self.fields_repository.create_field(template.to_profile_field(user_id))
        except IntegrityError as exc:
            # Concurrent apply won the race; report it like the pre-check does.
            record_template_application("duplicate")
            winner = await self.fields_repository.get_field_by_user_and_key(user_id, template.field_key)
            winner_id = winner.id if winner is not None else "unknown"
            raise ConflictException(
                f"Field template already applied to user, field id: {winner_id}",
            ) from exc
        except SQLAlchemyError as exc:
            record_template_application("error")
            raise InternalException.wrap("apply field template", exc) from exc

        record_template_application("applied")
        logger.info(
            "Field template applied: template_id=%s user_id=%s field_id=%s",
            template_id,
            user_id,
            field.id,
        )
        return ApplyTemplateResult(
            field_id=field.id,
            field_key=field.field_key,
            field_name=field.field_name,
            message="Field template applied",
        )

    async def apply_templates_to_user(self, template_ids: list[int], user_id: int) -> ApplyTemplatesResult:
        """Apply each template independently; failures never stop the batch."""
        result = ApplyTemplatesResult(total_count=len(template_ids))

        for template_id in template_ids:
            try:
                # A failed statement inside the savepoint leaves earlier items intact.
                async with self.repository.savepoint():
                    applied = await self.apply_template_to_user(template_id, user_id)
            except AppException as exc:
                logger.warning(
                    "Field template apply failed: template_id=%s user_id=%s reason=%s",
                    template_id,
                    user_id,
                    exc.message,
                )
                result.failed_count += 1
                result.items.append(
                    ApplyItemOutcome(template_id=template_id, succeeded=False, error=exc.message),
                )
                continue

            result.success_count += 1
            result.applied_fields.append(applied)
            result.items.append(
                ApplyItemOutcome(template_id=template_id, succeeded=True, field_id=applied.field_id),
            )

        if result.success_count > 0:
            result.message = f"Applied {result.success_count} field template(s)"
        else:
            result.message = "No field templates were applied"

        logger.info(
            "Field template batch for user_id=%s: total=%s success=%s failed=%s",
            user_id,
            result.total_count,
            result.success_count,
            result.failed_count,
        )
        return result


async def get_field_templates_service(
    session: AsyncSession = Depends(get_db_session),
) -> FieldTemplatesService:
    """Dependency provider for field templates service."""
    return FieldTemplatesService(
        FieldTemplatesRepository(session),
        ProfileFieldsRepository(session),
        UsersRepository(session),
    )
