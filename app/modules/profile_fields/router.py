"""Profile fields API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.modules.profile_fields.schemas import ProfileFieldRead, ProfileFieldUpdate
from app.modules.profile_fields.service import ProfileFieldsService, get_profile_fields_service
from app.shared.pagination import PageRequest, PageResponse, build_page_response, get_page_request
from app.shared.responses import Envelope, ok

router = APIRouter(tags=["profile-fields"])


@router.get("/users/{user_id}/profile-fields", response_model=Envelope[PageResponse[ProfileFieldRead]])
async def list_user_fields(
    user_id: int,
    page_request: PageRequest = Depends(get_page_request),
    service: ProfileFieldsService = Depends(get_profile_fields_service),
) -> Envelope[PageResponse[ProfileFieldRead]]:
    """List a user's profile fields in display order."""
    items, total = await service.list_user_fields(user_id, page_request)
    serialized = [ProfileFieldRead.model_validate(item) for item in items]
    return ok(build_page_response(serialized, total, page_request))


@router.get("/profile/fields/{field_id}", response_model=Envelope[ProfileFieldRead])
async def get_field(
    field_id: int,
    service: ProfileFieldsService = Depends(get_profile_fields_service),
) -> Envelope[ProfileFieldRead]:
    field = await service.get_field(field_id)
    return ok(ProfileFieldRead.model_validate(field))


@router.patch("/profile/fields/{field_id}", response_model=Envelope[ProfileFieldRead])
async def update_field(
    field_id: int,
    payload: ProfileFieldUpdate,
    service: ProfileFieldsService = Depends(get_profile_fields_service),
) -> Envelope[ProfileFieldRead]:
    """Edit a field copy; the source template is not touched."""
    field = await service.update_field(field_id, payload)
    return ok(ProfileFieldRead.model_validate(field), message="updated")


@router.delete("/profile/fields/{field_id}", response_model=Envelope[None])
async def delete_field(
    field_id: int,
    service: ProfileFieldsService = Depends(get_profile_fields_service),
) -> Envelope[None]:
    await service.delete_field(field_id)
    return ok(message="deleted")
