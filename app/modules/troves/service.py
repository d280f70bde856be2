"""Troves business logic layer."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.modules.troves.models import Trove
from app.modules.troves.repository import TrovesRepository
from app.modules.troves.schemas import TroveCreate, TroveUpdate
from app.shared.exceptions import NotFoundException
from app.shared.pagination import PageRequest


class TrovesService:
    """Troves domain service."""

    def __init__(self, repository: TrovesRepository) -> None:
        self.repository = repository

    async def create_trove(self, payload: TroveCreate) -> Trove:
        return await self.repository.create_trove(title=payload.title, description=payload.description)

    async def get_trove(self, trove_id: int) -> Trove:
        trove = await self.repository.get_trove_by_id(trove_id)
        if trove is None:
            raise NotFoundException("Trove not found")
        return trove

    async def list_troves(self, page_request: PageRequest) -> tuple[list[Trove], int]:
        return await self.repository.list_troves(page_request)

    async def update_trove(self, trove_id: int, payload: TroveUpdate) -> Trove:
        trove = await self.get_trove(trove_id)
        return await self.repository.update_trove(trove, **payload.model_dump(exclude_none=True))

    async def delete_trove(self, trove_id: int) -> None:
        trove = await self.get_trove(trove_id)
        await self.repository.soft_delete_trove(trove)


async def get_troves_service(session: AsyncSession = Depends(get_db_session)) -> TrovesService:
    """Dependency provider for troves service."""
    return TrovesService(TrovesRepository(session))
