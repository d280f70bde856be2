from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from app.modules.field_templates.repository import TEMPLATE_QUERY_COLUMNS
from app.modules.troves.repository import TROVE_QUERY_COLUMNS
from app.modules.users.models import User
from app.modules.users.repository import USER_QUERY_COLUMNS, UsersRepository
from app.modules.weapons.repository import WEAPON_QUERY_COLUMNS
from app.shared.exceptions import ValidationException
from app.shared.pagination import PageRequest, apply_page_request, paginate, parse_page_request


class FakeScalarResult:
    def __init__(self, items: list[Any]) -> None:
        self._items = items

    def all(self) -> list[Any]:
        return list(self._items)


class FakeSession:
    def __init__(self, total: int = 0, items: list[Any] | None = None) -> None:
        self.total = total
        self.items = items or []
        self.statements: list[Any] = []

    async def scalar(self, stmt: Any) -> int:
        self.statements.append(stmt)
        return self.total

    async def scalars(self, stmt: Any) -> FakeScalarResult:
        self.statements.append(stmt)
        return FakeScalarResult(self.items)


def _compile(stmt: Any) -> Any:
    return stmt.compile(dialect=postgresql.dialect())


def test_unknown_sort_field_is_rejected_before_building_sql() -> None:
    page_request = PageRequest(sort_by="password_hash")

    with pytest.raises(ValidationException) as exc:
        apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)
    assert exc.value.message == "invalid sort field: password_hash"


def test_unknown_search_field_is_rejected_before_building_sql() -> None:
    page_request = PageRequest(keyword="john", search_by="status")

    with pytest.raises(ValidationException) as exc:
        apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)
    assert exc.value.message == "invalid search field: status"


def test_unknown_search_field_is_rejected_without_keyword() -> None:
    page_request = parse_page_request(search_by="password_hash")

    with pytest.raises(ValidationException) as exc:
        apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)
    assert exc.value.message == "invalid search field: password_hash"


def test_search_by_single_field_binds_keyword_as_parameter() -> None:
    keyword = "x' OR '1'='1"
    page_request = PageRequest(keyword=keyword, search_by="username")

    _, page_stmt = apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)
    compiled = _compile(page_stmt)
    sql_text = str(compiled)

    assert "users.username LIKE" in sql_text
    assert "users.email LIKE" not in sql_text
    assert keyword not in sql_text
    assert f"%{keyword}%" in compiled.params.values()


def test_search_without_field_matches_any_searchable_column() -> None:
    page_request = PageRequest(keyword="john")

    _, page_stmt = apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)
    sql_text = str(_compile(page_stmt))

    assert "users.username LIKE" in sql_text
    assert "users.email LIKE" in sql_text
    assert "users.nickname LIKE" in sql_text
    assert " OR " in sql_text


def test_empty_keyword_adds_no_filter() -> None:
    page_request = PageRequest(search_by="username")

    _, page_stmt = apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)

    assert "LIKE" not in str(_compile(page_stmt))


def test_requested_sort_column_and_direction() -> None:
    page_request = PageRequest(sort_by="username", sort_order="asc")

    _, page_stmt = apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)

    assert "ORDER BY users.username ASC" in str(_compile(page_stmt))


def test_default_order_applies_without_sort_by() -> None:
    _, page_stmt = apply_page_request(select(User), PageRequest(), USER_QUERY_COLUMNS)

    assert "ORDER BY users.created_at DESC" in str(_compile(page_stmt))


def test_page_statement_carries_offset_and_limit() -> None:
    page_request = PageRequest(page=3, page_size=20)

    _, page_stmt = apply_page_request(select(User), page_request, USER_QUERY_COLUMNS)
    compiled = _compile(page_stmt)

    assert "LIMIT" in str(compiled)
    assert "OFFSET" in str(compiled)
    assert 40 in compiled.params.values()
    assert 20 in compiled.params.values()


@pytest.mark.parametrize(
    ("columns", "sort_field", "search_field"),
    [
        (WEAPON_QUERY_COLUMNS, "level", "name"),
        (TROVE_QUERY_COLUMNS, "title", "description"),
        (TEMPLATE_QUERY_COLUMNS, "display_order", "field_name"),
    ],
)
def test_entity_allow_lists_expose_expected_fields(columns, sort_field: str, search_field: str) -> None:
    assert sort_field in columns.sort_fields
    assert search_field in columns.search_fields
    assert "deleted_at" not in columns.sort_fields


@pytest.mark.asyncio
async def test_paginate_counts_filtered_rows_then_fetches_page() -> None:
    session = FakeSession(total=25, items=["a", "b"])
    page_request = PageRequest(page=3, page_size=10, keyword="jo")

    items, total = await paginate(session, select(User), page_request, USER_QUERY_COLUMNS)

    assert items == ["a", "b"]
    assert total == 25
    assert len(session.statements) == 2
    count_sql = str(_compile(session.statements[0]))
    assert "count(*)" in count_sql
    assert "LIKE" in count_sql
    assert "ORDER BY" not in count_sql


@pytest.mark.asyncio
async def test_repository_rejects_invalid_sort_without_querying() -> None:
    session = FakeSession()
    repository = UsersRepository(session)

    with pytest.raises(ValidationException):
        await repository.list_users(PageRequest(sort_by="1; DROP TABLE users"))
    assert session.statements == []


@pytest.mark.asyncio
async def test_users_listing_excludes_soft_deleted_rows() -> None:
    session = FakeSession()
    repository = UsersRepository(session)

    await repository.list_users(PageRequest())

    assert "users.deleted_at IS NULL" in str(_compile(session.statements[1]))
