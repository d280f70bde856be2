"""Weapons API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.modules.weapons.schemas import WeaponCreate, WeaponRead, WeaponUpdate
from app.modules.weapons.service import WeaponsService, get_weapons_service
from app.shared.pagination import PageRequest, PageResponse, build_page_response, get_page_request
from app.shared.responses import Envelope, ok

router = APIRouter(prefix="/weapons", tags=["weapons"])


@router.post("", response_model=Envelope[WeaponRead], status_code=status.HTTP_201_CREATED)
async def create_weapon(
    payload: WeaponCreate,
    service: WeaponsService = Depends(get_weapons_service),
) -> Envelope[WeaponRead]:
    weapon = await service.create_weapon(payload)
    return ok(WeaponRead.model_validate(weapon), message="created")


@router.get("", response_model=Envelope[PageResponse[WeaponRead]])
async def list_weapons(
    page_request: PageRequest = Depends(get_page_request),
    service: WeaponsService = Depends(get_weapons_service),
) -> Envelope[PageResponse[WeaponRead]]:
    """List weapons with search by name."""
    items, total = await service.list_weapons(page_request)
    serialized = [WeaponRead.model_validate(item) for item in items]
    return ok(build_page_response(serialized, total, page_request))


@router.get("/{weapon_id}", response_model=Envelope[WeaponRead])
async def get_weapon(
    weapon_id: int,
    service: WeaponsService = Depends(get_weapons_service),
) -> Envelope[WeaponRead]:
    weapon = await service.get_weapon(weapon_id)
    return ok(WeaponRead.model_validate(weapon))


@router.patch("/{weapon_id}", response_model=Envelope[WeaponRead])
async def update_weapon(
    weapon_id: int,
    payload: WeaponUpdate,
    service: WeaponsService = Depends(get_weapons_service),
) -> Envelope[WeaponRead]:
    weapon = await service.update_weapon(weapon_id, payload)
    return ok(WeaponRead.model_validate(weapon), message="updated")


@router.delete("/{weapon_id}", response_model=Envelope[None])
async def delete_weapon(
    weapon_id: int,
    service: WeaponsService = Depends(get_weapons_service),
) -> Envelope[None]:
    await service.delete_weapon(weapon_id)
    return ok(message="deleted")
