from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from sqlalchemy.exc import OperationalError

import app.main as main_module
from app.modules.field_templates.schemas import (
    ApplyItemOutcome,
    ApplyTemplateResult,
    ApplyTemplatesResult,
)
from app.modules.field_templates.service import get_field_templates_service
from app.modules.users.repository import UsersRepository
from app.modules.users.service import UsersService, get_users_service
from app.shared.exceptions import ConflictException, NotFoundException

PREFIX = main_module.settings.api_prefix


class FakeScalarResult:
    def all(self) -> list[Any]:
        return []


class EmptySession:
    def __init__(self) -> None:
        self.statements: list[Any] = []

    async def scalar(self, stmt: Any) -> None:
        self.statements.append(stmt)
        return None

    async def scalars(self, stmt: Any) -> FakeScalarResult:
        self.statements.append(stmt)
        return FakeScalarResult()


def _template(template_id: int, field_key: str) -> SimpleNamespace:
    now = datetime.now(UTC)
    return SimpleNamespace(
        id=template_id,
        field_key=field_key,
        field_name=field_key.title(),
        field_type="SingleLineText",
        is_required=False,
        is_searchable=False,
        is_public=True,
        default_value="",
        options="",
        validation="",
        display_order=0,
        icon="",
        description="",
        default_unlock_rules="",
        category="background",
        is_active=True,
        created_at=now,
        updated_at=now,
    )


class StubFieldTemplatesService:
    """Answers from canned data keyed by template id."""

    def __init__(self) -> None:
        self.applied: set[tuple[int, int]] = set()
        self.templates = {1: _template(1, "hometown")}

    async def get_template(self, template_id: int) -> SimpleNamespace:
        if template_id not in self.templates:
            raise NotFoundException("Field template not found")
        return self.templates[template_id]

    async def get_template_by_field_key(self, field_key: str) -> SimpleNamespace:
        for template in self.templates.values():
            if template.field_key == field_key:
                return template
        raise NotFoundException("Field template not found")

    async def apply_template_to_user(self, template_id: int, user_id: int) -> ApplyTemplateResult:
        template = await self.get_template(template_id)
        if (template_id, user_id) in self.applied:
            raise ConflictException("Field template already applied to user, field id: 42")
        self.applied.add((template_id, user_id))
        return ApplyTemplateResult(
            field_id=42,
            field_key=template.field_key,
            field_name=template.field_name,
            message="Field template applied",
        )

    async def apply_templates_to_user(self, template_ids: list[int], user_id: int) -> ApplyTemplatesResult:
        result = ApplyTemplatesResult(total_count=len(template_ids))
        for template_id in template_ids:
            try:
                applied = await self.apply_template_to_user(template_id, user_id)
            except NotFoundException as exc:
                result.failed_count += 1
                result.items.append(ApplyItemOutcome(template_id=template_id, succeeded=False, error=exc.message))
                continue
            result.success_count += 1
            result.applied_fields.append(applied)
            result.items.append(ApplyItemOutcome(template_id=template_id, succeeded=True, field_id=applied.field_id))
        return result


@pytest.fixture
def api_session() -> Iterator[EmptySession]:
    session = EmptySession()
    main_module.app.dependency_overrides[get_users_service] = lambda: UsersService(UsersRepository(session))
    templates_service = StubFieldTemplatesService()
    main_module.app.dependency_overrides[get_field_templates_service] = lambda: templates_service
    yield session
    main_module.app.dependency_overrides.clear()


async def _request(method: str, path: str, **kwargs: Any) -> httpx.Response:
    transport = httpx.ASGITransport(app=main_module.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        return await client.request(method, path, **kwargs)


@pytest.mark.asyncio
async def test_list_normalizes_bad_pagination_params(api_session: EmptySession) -> None:
    response = await _request("GET", f"{PREFIX}/users", params={"page": "abc", "page_size": "999"})

    assert response.status_code == 200
    body = response.json()
    assert body["code"] == 0
    assert body["message"] == "success"
    assert body["data"]["page"] == 1
    assert body["data"]["page_size"] == 100
    assert body["data"]["total"] == 0
    assert body["data"]["total_pages"] == 0


@pytest.mark.asyncio
async def test_list_rejects_unknown_sort_field(api_session: EmptySession) -> None:
    response = await _request("GET", f"{PREFIX}/users", params={"sort_by": "password"})

    assert response.status_code == 400
    assert response.json() == {
        "code": 1001,
        "message": "invalid sort field: password",
        "data": None,
        "detail": None,
    }
    assert api_session.statements == []


@pytest.mark.asyncio
async def test_list_rejects_unknown_search_field(api_session: EmptySession) -> None:
    response = await _request("GET", f"{PREFIX}/users", params={"keyword": "al", "search_by": "status"})

    assert response.status_code == 400
    assert response.json()["message"] == "invalid search field: status"


@pytest.mark.asyncio
async def test_missing_user_uses_not_found_envelope(api_session: EmptySession) -> None:
    response = await _request("GET", f"{PREFIX}/users/5")

    assert response.status_code == 404
    assert response.json()["code"] == 1002
    assert response.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_apply_template_then_conflict(api_session: EmptySession) -> None:
    path = f"{PREFIX}/profile/field-templates/1/apply"

    first = await _request("POST", path, json={"user_id": 7})
    second = await _request("POST", path, json={"user_id": 7})

    assert first.status_code == 200
    assert first.json()["data"]["field_id"] == 42
    assert second.status_code == 409
    assert second.json()["code"] == 1006
    assert "field id: 42" in second.json()["message"]


@pytest.mark.asyncio
async def test_apply_template_rejects_non_positive_user_id(api_session: EmptySession) -> None:
    response = await _request("POST", f"{PREFIX}/profile/field-templates/1/apply", json={"user_id": 0})

    assert response.status_code == 422
    assert response.json()["code"] == 1001
    assert response.json()["data"]


@pytest.mark.asyncio
async def test_batch_apply_reports_partial_success(api_session: EmptySession) -> None:
    response = await _request(
        "POST",
        f"{PREFIX}/profile/field-templates/apply",
        json={"template_ids": [1, 99], "user_id": 7},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_count"] == 2
    assert data["success_count"] == 1
    assert data["failed_count"] == 1
    assert data["items"][1]["error"] == "Field template not found"


@pytest.mark.asyncio
async def test_template_lookup_by_key_route(api_session: EmptySession) -> None:
    found = await _request("GET", f"{PREFIX}/profile/field-templates/key/hometown")
    missing = await _request("GET", f"{PREFIX}/profile/field-templates/key/nope")

    assert found.status_code == 200
    assert found.json()["data"]["id"] == 1
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_create_template_rejects_unknown_field_type(api_session: EmptySession) -> None:
    response = await _request(
        "POST",
        f"{PREFIX}/profile/field-templates",
        json={"field_key": "x", "field_name": "X", "field_type": "Hologram"},
    )

    assert response.status_code == 422
    assert response.json()["code"] == 1001


class BrokenSession(EmptySession):
    async def scalar(self, stmt: Any) -> None:
        raise OperationalError("SELECT users", {}, Exception("connection reset"))


@pytest.mark.asyncio
async def test_storage_error_in_entity_read_keeps_route_context(api_session: EmptySession) -> None:
    session = BrokenSession()
    main_module.app.dependency_overrides[get_users_service] = lambda: UsersService(UsersRepository(session))

    response = await _request("GET", f"{PREFIX}/users/5")

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == 1005
    assert body["message"] == f"GET {PREFIX}/users/{{user_id}} failed"
    assert "connection reset" in body["detail"]
