"""Weapons repository layer."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.weapons.models import Weapon
from app.shared.pagination import PageRequest, QueryColumns, paginate
from app.shared.utils import utc_now

WEAPON_QUERY_COLUMNS = QueryColumns(
    sortable={
        "id": Weapon.id,
        "name": Weapon.name,
        "level": Weapon.level,
        "type": Weapon.type,
        "created_at": Weapon.created_at,
    },
    searchable={"name": Weapon.name},
    default_order=(Weapon.created_at.desc(),),
)


class WeaponsRepository:
    """DB operations for weapons domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_weapon(self, **values) -> Weapon:
        weapon = Weapon(**values)
        self.session.add(weapon)
        await self.session.flush()
        return weapon

    async def get_weapon_by_id(self, weapon_id: int) -> Weapon | None:
        stmt = select(Weapon).where(Weapon.id == weapon_id, Weapon.deleted_at.is_(None))
        return await self.session.scalar(stmt)

    async def get_weapon_by_name(self, name: str) -> Weapon | None:
        stmt = select(Weapon).where(Weapon.name == name)
        return await self.session.scalar(stmt)

    async def list_weapons(self, page_request: PageRequest) -> tuple[list[Weapon], int]:
        base_stmt = select(Weapon).where(Weapon.deleted_at.is_(None))
        return await paginate(self.session, base_stmt, page_request, WEAPON_QUERY_COLUMNS)

    async def update_weapon(self, weapon: Weapon, **changes) -> Weapon:
        for key, value in changes.items():
            if value is not None:
                setattr(weapon, key, value)
        await self.session.flush()
        return weapon

    async def soft_delete_weapon(self, weapon: Weapon) -> None:
        weapon.deleted_at = utc_now()
        await self.session.flush()
