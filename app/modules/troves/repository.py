"""Troves repository layer."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.troves.models import Trove
from app.shared.pagination import PageRequest, QueryColumns, paginate
from app.shared.utils import utc_now

TROVE_QUERY_COLUMNS = QueryColumns(
    sortable={
        "id": Trove.id,
        "title": Trove.title,
        "created_at": Trove.created_at,
    },
    searchable={
        "title": Trove.title,
        "description": Trove.description,
    },
    default_order=(Trove.created_at.desc(),),
)


class TrovesRepository:
    """DB operations for troves domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_trove(self, title: str, description: str) -> Trove:
        trove = Trove(title=title, description=description)
        self.session.add(trove)
        await self.session.flush()
        return trove

    async def get_trove_by_id(self, trove_id: int) -> Trove | None:
        stmt = select(Trove).where(Trove.id == trove_id, Trove.deleted_at.is_(None))
        return await self.session.scalar(stmt)

    async def list_troves(self, page_request: PageRequest) -> tuple[list[Trove], int]:
        base_stmt = select(Trove).where(Trove.deleted_at.is_(None))
        return await paginate(self.session, base_stmt, page_request, TROVE_QUERY_COLUMNS)

    async def update_trove(self, trove: Trove, **changes) -> Trove:
        for key, value in changes.items():
            if value is not None:
                setattr(trove, key, value)
        await self.session.flush()
        return trove

    async def soft_delete_trove(self, trove: Trove) -> None:
        trove.deleted_at = utc_now()
        await self.session.flush()
