"""Field templates repository layer."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from app.modules.field_templates.models import ProfileFieldTemplate
from app.shared.pagination import PageRequest, QueryColumns, paginate
from app.shared.utils import utc_now

TEMPLATE_QUERY_COLUMNS = QueryColumns(
    sortable={
        "id": ProfileFieldTemplate.id,
        "field_key": ProfileFieldTemplate.field_key,
        "category": ProfileFieldTemplate.category,
        "display_order": ProfileFieldTemplate.display_order,
        "created_at": ProfileFieldTemplate.created_at,
    },
    searchable={
        "field_key": ProfileFieldTemplate.field_key,
        "field_name": ProfileFieldTemplate.field_name,
        "category": ProfileFieldTemplate.category,
    },
    default_order=(
        ProfileFieldTemplate.category.asc(),
        ProfileFieldTemplate.display_order.asc(),
        ProfileFieldTemplate.created_at.desc(),
    ),
)


class FieldTemplatesRepository:
    """DB operations for profile field templates."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def savepoint(self) -> AsyncSessionTransaction:
        return self.session.begin_nested()

    async def create_template(self, **values) -> ProfileFieldTemplate:
        template = ProfileFieldTemplate(**values)
        self.session.add(template)
        await self.session.flush()
        return template

    async def get_template_by_id(self, template_id: int) -> ProfileFieldTemplate | None:
        stmt = select(ProfileFieldTemplate).where(
            ProfileFieldTemplate.id == template_id,
            ProfileFieldTemplate.deleted_at.is_(None),
        )
        return await self.session.scalar(stmt)

    async def get_template_by_field_key(
        self,
        field_key: str,
        *,
        include_deleted: bool = False,
    ) -> ProfileFieldTemplate | None:
        stmt = select(ProfileFieldTemplate).where(ProfileFieldTemplate.field_key == field_key)
        if not include_deleted:
            stmt = stmt.where(ProfileFieldTemplate.deleted_at.is_(None))
        return await self.session.scalar(stmt)

    async def list_templates(
        self,
        page_request: PageRequest,
        *,
        category: str | None = None,
        field_type: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[ProfileFieldTemplate], int]:
        stmt = select(ProfileFieldTemplate).where(ProfileFieldTemplate.deleted_at.is_(None))
        if category:
            stmt = stmt.where(ProfileFieldTemplate.category == category)
        if field_type:
            stmt = stmt.where(ProfileFieldTemplate.field_type == field_type)
        if is_active is not None:
            stmt = stmt.where(ProfileFieldTemplate.is_active.is_(is_active))
        return await paginate(self.session, stmt, page_request, TEMPLATE_QUERY_COLUMNS)

    async def list_active_by_category(self, category: str) -> list[ProfileFieldTemplate]:
        stmt = (
            select(ProfileFieldTemplate)
            .where(
                ProfileFieldTemplate.category == category,
                ProfileFieldTemplate.is_active.is_(True),
                ProfileFieldTemplate.deleted_at.is_(None),
            )
            .order_by(ProfileFieldTemplate.display_order.asc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def update_template(self, template: ProfileFieldTemplate, **changes) -> ProfileFieldTemplate:
        for key, value in changes.items():
            setattr(template, key, value)
        await self.session.flush()
        return template

    async def soft_delete_template(self, template: ProfileFieldTemplate) -> None:
        template.deleted_at = utc_now()
        await self.session.flush()
