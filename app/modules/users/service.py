"""Users business logic layer."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.modules.users.models import User
from app.modules.users.repository import UsersRepository
from app.modules.users.schemas import UserCreate, UserUpdate
from app.shared.exceptions import ConflictException, NotFoundException
from app.shared.pagination import PageRequest


class UsersService:
    """Users domain service."""

    def __init__(self, repository: UsersRepository) -> None:
        self.repository = repository

    async def create_user(self, payload: UserCreate) -> User:
        """Create user with unique username and email."""
        existing = await self.repository.find_by_username_or_email(payload.username, payload.email)
        if existing is not None:
            raise ConflictException("User with this username or email already exists")

        return await self.repository.create_user(
            username=payload.username,
            email=payload.email,
            nickname=payload.nickname,
            avatar=payload.avatar,
        )

    async def get_user(self, user_id: int) -> User:
        user = await self.repository.get_user_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")
        return user

    async def list_users(self, page_request: PageRequest) -> tuple[list[User], int]:
        return await self.repository.list_users(page_request)

    async def update_user(self, user_id: int, payload: UserUpdate) -> User:
        user = await self.get_user(user_id)
        return await self.repository.update_user(user, **payload.model_dump(exclude_none=True))

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        await self.repository.soft_delete_user(user)


async def get_users_service(session: AsyncSession = Depends(get_db_session)) -> UsersService:
    """Dependency provider for users service."""
    return UsersService(UsersRepository(session))
