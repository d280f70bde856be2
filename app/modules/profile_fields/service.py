"""Profile fields business logic layer."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.modules.profile_fields.models import ProfileField
from app.modules.profile_fields.repository import ProfileFieldsRepository
from app.modules.profile_fields.schemas import ProfileFieldUpdate
from app.modules.users.repository import UsersRepository
from app.shared.exceptions import NotFoundException
from app.shared.pagination import PageRequest


class ProfileFieldsService:
    """Read and edit the field copies a user owns."""

    def __init__(
        self,
        repository: ProfileFieldsRepository,
        users_repository: UsersRepository,
    ) -> None:
        self.repository = repository
        self.users_repository = users_repository

    async def list_user_fields(
        self,
        user_id: int,
        page_request: PageRequest,
    ) -> tuple[list[ProfileField], int]:
        if await self.users_repository.get_user_by_id(user_id) is None:
            raise NotFoundException("User not found")
        return await self.repository.list_user_fields(user_id, page_request)

    async def get_field(self, field_id: int) -> ProfileField:
        field = await self.repository.get_field_by_id(field_id)
        if field is None:
            raise NotFoundException("Profile field not found")
        return field

    async def update_field(self, field_id: int, payload: ProfileFieldUpdate) -> ProfileField:
        field = await self.get_field(field_id)
        return await self.repository.update_field(field, **payload.model_dump(exclude_none=True))

    async def delete_field(self, field_id: int) -> None:
        field = await self.get_field(field_id)
        await self.repository.delete_field(field)


async def get_profile_fields_service(
    session: AsyncSession = Depends(get_db_session),
) -> ProfileFieldsService:
    """Dependency provider for profile fields service."""
    return ProfileFieldsService(ProfileFieldsRepository(session), UsersRepository(session))
