"""Users repository layer."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.users.models import User
from app.shared.pagination import PageRequest, QueryColumns, paginate
from app.shared.utils import utc_now

USER_QUERY_COLUMNS = QueryColumns(
    sortable={
        "id": User.id,
        "username": User.username,
        "email": User.email,
        "nickname": User.nickname,
        "status": User.status,
        "created_at": User.created_at,
        "updated_at": User.updated_at,
    },
    searchable={
        "username": User.username,
        "email": User.email,
        "nickname": User.nickname,
    },
    default_order=(User.created_at.desc(),),
)


class UsersRepository:
    """DB operations for users domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_user(self, username: str, email: str, nickname: str, avatar: str) -> User:
        user = User(username=username, email=email, nickname=nickname, avatar=avatar)
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_user_by_id(self, user_id: int) -> User | None:
        stmt = select(User).where(User.id == user_id, User.deleted_at.is_(None))
        return await self.session.scalar(stmt)

    async def find_by_username_or_email(self, username: str, email: str) -> User | None:
        stmt = select(User).where(or_(User.username == username, User.email == email)).limit(1)
        return await self.session.scalar(stmt)

    async def list_users(self, page_request: PageRequest) -> tuple[list[User], int]:
        base_stmt = select(User).where(User.deleted_at.is_(None))
        return await paginate(self.session, base_stmt, page_request, USER_QUERY_COLUMNS)

    async def update_user(self, user: User, **changes) -> User:
        for key, value in changes.items():
            if value is not None:
                setattr(user, key, value)
        await self.session.flush()
        return user

    async def soft_delete_user(self, user: User) -> None:
        user.deleted_at = utc_now()
        await self.session.flush()
