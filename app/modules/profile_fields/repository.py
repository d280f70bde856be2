"""Profile fields repository layer."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.profile_fields.models import ProfileField
from app.shared.pagination import PageRequest, QueryColumns, paginate

PROFILE_FIELD_QUERY_COLUMNS = QueryColumns(
    sortable={
        "id": ProfileField.id,
        "field_key": ProfileField.field_key,
        "display_order": ProfileField.display_order,
        "created_at": ProfileField.created_at,
    },
    searchable={
        "field_key": ProfileField.field_key,
        "field_name": ProfileField.field_name,
    },
    default_order=(ProfileField.display_order.asc(), ProfileField.id.asc()),
)


class ProfileFieldsRepository:
    """DB operations for per-user profile fields."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_field(self, field: ProfileField) -> ProfileField:
        # Savepoint: a unique-constraint hit rolls back this insert only.
        async with self.session.begin_nested():
            self.session.add(field)
            await self.session.flush()
        return field

    async def get_field_by_id(self, field_id: int) -> ProfileField | None:
        stmt = select(ProfileField).where(ProfileField.id == field_id)
        return await self.session.scalar(stmt)

    async def get_field_by_user_and_key(self, user_id: int, field_key: str) -> ProfileField | None:
        stmt = select(ProfileField).where(
            ProfileField.user_id == user_id,
            ProfileField.field_key == field_key,
        )
        return await self.session.scalar(stmt)

    async def list_user_fields(
        self,
        user_id: int,
        page_request: PageRequest,
    ) -> tuple[list[ProfileField], int]:
        base_stmt = select(ProfileField).where(ProfileField.user_id == user_id)
        return await paginate(self.session, base_stmt, page_request, PROFILE_FIELD_QUERY_COLUMNS)

    async def update_field(self, field: ProfileField, **changes) -> ProfileField:
        for key, value in changes.items():
            if value is not None:
                setattr(field, key, value)
        await self.session.flush()
        return field

    async def delete_field(self, field: ProfileField) -> None:
        await self.session.delete(field)
        await self.session.flush()
