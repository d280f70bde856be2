"""Users API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.modules.users.schemas import UserCreate, UserRead, UserUpdate
from app.modules.users.service import UsersService, get_users_service
from app.shared.pagination import PageRequest, PageResponse, build_page_response, get_page_request
from app.shared.responses import Envelope, ok

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=Envelope[UserRead], status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    service: UsersService = Depends(get_users_service),
) -> Envelope[UserRead]:
    """Create a user."""
    user = await service.create_user(payload)
    return ok(UserRead.model_validate(user), message="created")


@router.get("", response_model=Envelope[PageResponse[UserRead]])
async def list_users(
    page_request: PageRequest = Depends(get_page_request),
    service: UsersService = Depends(get_users_service),
) -> Envelope[PageResponse[UserRead]]:
    """List users with search by username/email/nickname."""
    items, total = await service.list_users(page_request)
    serialized = [UserRead.model_validate(item) for item in items]
    return ok(build_page_response(serialized, total, page_request))


@router.get("/{user_id}", response_model=Envelope[UserRead])
async def get_user(
    user_id: int,
    service: UsersService = Depends(get_users_service),
) -> Envelope[UserRead]:
    """Return one user."""
    user = await service.get_user(user_id)
    return ok(UserRead.model_validate(user))


@router.patch("/{user_id}", response_model=Envelope[UserRead])
async def update_user(
    user_id: int,
    payload: UserUpdate,
    service: UsersService = Depends(get_users_service),
) -> Envelope[UserRead]:
    """Partially update a user."""
    user = await service.update_user(user_id, payload)
    return ok(UserRead.model_validate(user), message="updated")


@router.delete("/{user_id}", response_model=Envelope[None])
async def delete_user(
    user_id: int,
    service: UsersService = Depends(get_users_service),
) -> Envelope[None]:
    """Soft-delete a user."""
    await service.delete_user(user_id)
    return ok(message="deleted")
