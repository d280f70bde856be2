"""Troves API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.modules.troves.schemas import TroveCreate, TroveRead, TroveUpdate
from app.modules.troves.service import TrovesService, get_troves_service
from app.shared.pagination import PageRequest, PageResponse, build_page_response, get_page_request
from app.shared.responses import Envelope, ok

router = APIRouter(prefix="/troves", tags=["troves"])


@router.post("", response_model=Envelope[TroveRead], status_code=status.HTTP_201_CREATED)
async def create_trove(
    payload: TroveCreate,
    service: TrovesService = Depends(get_troves_service),
) -> Envelope[TroveRead]:
    trove = await service.create_trove(payload)
    return ok(TroveRead.model_validate(trove), message="created")


@router.get("", response_model=Envelope[PageResponse[TroveRead]])
async def list_troves(
    page_request: PageRequest = Depends(get_page_request),
    service: TrovesService = Depends(get_troves_service),
) -> Envelope[PageResponse[TroveRead]]:
    """List troves with search over title and description."""
    items, total = await service.list_troves(page_request)
    serialized = [TroveRead.model_validate(item) for item in items]
    return ok(build_page_response(serialized, total, page_request))


@router.get("/{trove_id}", response_model=Envelope[TroveRead])
async def get_trove(
    trove_id: int,
    service: TrovesService = Depends(get_troves_service),
) -> Envelope[TroveRead]:
    trove = await service.get_trove(trove_id)
    return ok(TroveRead.model_validate(trove))


@router.patch("/{trove_id}", response_model=Envelope[TroveRead])
async def update_trove(
    trove_id: int,
    payload: TroveUpdate,
    service: TrovesService = Depends(get_troves_service),
) -> Envelope[TroveRead]:
    trove = await service.update_trove(trove_id, payload)
    return ok(TroveRead.model_validate(trove), message="updated")


@router.delete("/{trove_id}", response_model=Envelope[None])
async def delete_trove(
    trove_id: int,
    service: TrovesService = Depends(get_troves_service),
) -> Envelope[None]:
    await service.delete_trove(trove_id)
    return ok(message="deleted")
