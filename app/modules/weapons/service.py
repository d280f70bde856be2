"""Weapons business logic layer."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.modules.weapons.models import Weapon
from app.modules.weapons.repository import WeaponsRepository
from app.modules.weapons.schemas import WeaponCreate, WeaponUpdate
from app.shared.exceptions import ConflictException, NotFoundException
from app.shared.pagination import PageRequest


class WeaponsService:
    """Weapons domain service."""

    def __init__(self, repository: WeaponsRepository) -> None:
        self.repository = repository

    async def create_weapon(self, payload: WeaponCreate) -> Weapon:
        if await self.repository.get_weapon_by_name(payload.name) is not None:
            raise ConflictException("Weapon with this name already exists")
        return await self.repository.create_weapon(**payload.model_dump())

    async def get_weapon(self, weapon_id: int) -> Weapon:
        weapon = await self.repository.get_weapon_by_id(weapon_id)
        if weapon is None:
            raise NotFoundException("Weapon not found")
        return weapon

    async def list_weapons(self, page_request: PageRequest) -> tuple[list[Weapon], int]:
        return await self.repository.list_weapons(page_request)

    async def update_weapon(self, weapon_id: int, payload: WeaponUpdate) -> Weapon:
        weapon = await self.get_weapon(weapon_id)
        changes = payload.model_dump(exclude_none=True)
        new_name = changes.get("name")
        if new_name is not None and new_name != weapon.name:
            if await self.repository.get_weapon_by_name(new_name) is not None:
                raise ConflictException("Weapon with this name already exists")
        return await self.repository.update_weapon(weapon, **changes)

    async def delete_weapon(self, weapon_id: int) -> None:
        weapon = await self.get_weapon(weapon_id)
        await self.repository.soft_delete_weapon(weapon)


async def get_weapons_service(session: AsyncSession = Depends(get_db_session)) -> WeaponsService:
    """Dependency provider for weapons service."""
    return WeaponsService(WeaponsRepository(session))
