"""Field templates API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.core.enums import FieldTypeEnum
from app.modules.field_templates.schemas import (
    ApplyTemplateRequest,
    ApplyTemplateResult,
    ApplyTemplatesRequest,
    ApplyTemplatesResult,
    FieldTemplateCreate,
    FieldTemplateRead,
    FieldTemplateUpdate,
)
from app.modules.field_templates.service import FieldTemplatesService, get_field_templates_service
from app.shared.pagination import PageRequest, PageResponse, build_page_response, get_page_request
from app.shared.responses import Envelope, ok

router = APIRouter(prefix="/profile/field-templates", tags=["profile-field-templates"])


@router.post("", response_model=Envelope[FieldTemplateRead], status_code=status.HTTP_201_CREATED)
async def create_template(
    payload: FieldTemplateCreate,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[FieldTemplateRead]:
    """Create a field template."""
    template = await service.create_template(payload)
    return ok(FieldTemplateRead.model_validate(template), message="created")


@router.get("", response_model=Envelope[PageResponse[FieldTemplateRead]])
async def list_templates(
    category: str | None = Query(default=None, max_length=50),
    field_type: FieldTypeEnum | None = Query(default=None),
    is_active: bool | None = Query(default=None),
    page_request: PageRequest = Depends(get_page_request),
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[PageResponse[FieldTemplateRead]]:
    """List templates ordered by category and display order."""
    items, total = await service.list_templates(
        page_request,
        category=category,
        field_type=field_type,
        is_active=is_active,
    )
    serialized = [FieldTemplateRead.model_validate(item) for item in items]
    return ok(build_page_response(serialized, total, page_request))


@router.post("/apply", response_model=Envelope[ApplyTemplatesResult])
async def apply_templates(
    payload: ApplyTemplatesRequest,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[ApplyTemplatesResult]:
    """Apply several templates to a user; check failed_count for partial results."""
    result = await service.apply_templates_to_user(payload.template_ids, payload.user_id)
    return ok(result, message="batch apply finished")


@router.get("/key/{field_key}", response_model=Envelope[FieldTemplateRead])
async def get_template_by_key(
    field_key: str,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[FieldTemplateRead]:
    template = await service.get_template_by_field_key(field_key)
    return ok(FieldTemplateRead.model_validate(template))


@router.get("/category/{category}", response_model=Envelope[list[FieldTemplateRead]])
async def list_templates_by_category(
    category: str,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[list[FieldTemplateRead]]:
    """Active templates of one category in display order."""
    items = await service.list_templates_by_category(category)
    return ok([FieldTemplateRead.model_validate(item) for item in items])


@router.get("/{template_id}", response_model=Envelope[FieldTemplateRead])
async def get_template(
    template_id: int,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[FieldTemplateRead]:
    template = await service.get_template(template_id)
    return ok(FieldTemplateRead.model_validate(template))


@router.put("/{template_id}", response_model=Envelope[FieldTemplateRead])
async def update_template(
    template_id: int,
    payload: FieldTemplateUpdate,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[FieldTemplateRead]:
    """Partially update a template."""
    template = await service.update_template(template_id, payload)
    return ok(FieldTemplateRead.model_validate(template), message="updated")


@router.delete("/{template_id}", response_model=Envelope[None])
async def delete_template(
    template_id: int,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[None]:
    """Soft-delete a template."""
    await service.delete_template(template_id)
    return ok(message="deleted")


@router.post("/{template_id}/apply", response_model=Envelope[ApplyTemplateResult])
async def apply_template(
    template_id: int,
    payload: ApplyTemplateRequest,
    service: FieldTemplatesService = Depends(get_field_templates_service),
) -> Envelope[ApplyTemplateResult]:
    """Copy a template into a new profile field for the user."""
    result = await service.apply_template_to_user(template_id, payload.user_id)
    return ok(result, message="applied")
