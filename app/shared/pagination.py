"""Page request parsing, allow-listed search/sort and paged responses.

List endpoints accept ``page``, ``page_size``, ``sort_by``, ``sort_order``,
``keyword`` and ``search_by`` query parameters. Bad pagination bounds are
normalized rather than rejected; sort and search field names are checked
against a per-entity allow-list before any SQL is built, since they select
columns rather than values.

Pagination is offset based with a separate COUNT query. Deep pages on large
tables get progressively slower; there is no keyset/cursor variant.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field
from sqlalchemy import ColumnElement, Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.enums import SortOrderEnum
from app.shared.exceptions import ValidationException

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Values outside a signed 64-bit integer fall back to defaults; OFFSET must fit BIGINT.
INT64_MAX = 2**63 - 1
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class PageRequest(BaseModel):
    """Normalized pagination, sort and search parameters."""

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    sort_by: str = ""
    sort_order: SortOrderEnum = SortOrderEnum.DESC
    keyword: str = ""
    search_by: str = ""

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def has_sort(self) -> bool:
        return self.sort_by != ""

    @property
    def has_search(self) -> bool:
        return self.keyword != ""

    def validate_sort_field(self, allowed_fields: Iterable[str]) -> bool:
        """Return True when sort_by is empty or allow-listed verbatim."""
        if not self.sort_by:
            return True
        return self.sort_by in set(allowed_fields)

    def validate_search_field(self, allowed_fields: Iterable[str]) -> bool:
        """Return True when search_by is empty or allow-listed verbatim."""
        if not self.search_by:
            return True
        return self.search_by in set(allowed_fields)


def _parse_int(raw: object, default: int) -> int:
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw)
        if _INTEGER_PATTERN.fullmatch(text) is None:
            return default
        value = int(text)
    if not -INT64_MAX - 1 <= value <= INT64_MAX:
        return default
    return value


def parse_page_request(
    page: object = None,
    page_size: object = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    keyword: str | None = None,
    search_by: str | None = None,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> PageRequest:
    """Build a PageRequest from raw query values, normalizing bad bounds."""
    parsed_page = _parse_int(page, DEFAULT_PAGE)
    if parsed_page < 1:
        parsed_page = DEFAULT_PAGE

    parsed_size = _parse_int(page_size, default_page_size)
    if parsed_size < 1:
        parsed_size = default_page_size
    if parsed_size > max_page_size:
        parsed_size = max_page_size
    if (parsed_page - 1) * parsed_size > INT64_MAX:
        parsed_page = INT64_MAX // parsed_size + 1

    order = SortOrderEnum.DESC
    if sort_order in (SortOrderEnum.ASC.value, SortOrderEnum.DESC.value):
        order = SortOrderEnum(sort_order)

    return PageRequest(
        page=parsed_page,
        page_size=parsed_size,
        sort_by=sort_by or "",
        sort_order=order,
        keyword=keyword or "",
        search_by=search_by or "",
    )


def get_page_request(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None),
    sort_by: str | None = Query(default=None),
    sort_order: str | None = Query(default=None),
    keyword: str | None = Query(default=None),
    search_by: str | None = Query(default=None),
) -> PageRequest:
    """FastAPI dependency for page/sort/search params."""
    settings = get_settings()
    return parse_page_request(
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_order=sort_order,
        keyword=keyword,
        search_by=search_by,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


@dataclass(frozen=True, slots=True)
class QueryColumns:
    """Per-entity allow-lists mapping public field names to ORM columns."""

    sortable: Mapping[str, Any]
    searchable: Mapping[str, Any]
    default_order: Sequence[ColumnElement[Any]] = field(default_factory=tuple)

    @property
    def sort_fields(self) -> tuple[str, ...]:
        return tuple(self.sortable)

    @property
    def search_fields(self) -> tuple[str, ...]:
        return tuple(self.searchable)


def validate_page_request(page_request: PageRequest, columns: QueryColumns) -> None:
    """Reject sort/search fields outside the entity allow-list."""
    if not page_request.validate_search_field(columns.search_fields):
        raise ValidationException(f"invalid search field: {page_request.search_by}")
    if not page_request.validate_sort_field(columns.sort_fields):
        raise ValidationException(f"invalid sort field: {page_request.sort_by}")


def search_clause(page_request: PageRequest, columns: QueryColumns) -> ColumnElement[bool] | None:
    """Build the LIKE predicate for the keyword, or None without a keyword."""
    if not page_request.has_search:
        return None

    pattern = f"%{page_request.keyword}%"
    if page_request.search_by:
        return columns.searchable[page_request.search_by].like(pattern)
    if not columns.searchable:
        return None
    return or_(*(column.like(pattern) for column in columns.searchable.values()))


def order_clauses(page_request: PageRequest, columns: QueryColumns) -> list[ColumnElement[Any]]:
    """Resolve ORDER BY: requested column or the entity default order."""
    if page_request.has_sort:
        column = columns.sortable[page_request.sort_by]
        if page_request.sort_order == SortOrderEnum.ASC:
            return [column.asc()]
        return [column.desc()]
    return list(columns.default_order)


def apply_page_request(
    stmt: Select[Any],
    page_request: PageRequest,
    columns: QueryColumns,
) -> tuple[Select[Any], Select[Any]]:
    """Return (filtered statement, ordered page statement) for a request."""
    validate_page_request(page_request, columns)

    clause = search_clause(page_request, columns)
    if clause is not None:
        stmt = stmt.where(clause)

    page_stmt = (
        stmt.order_by(*order_clauses(page_request, columns))
        .offset(page_request.offset)
        .limit(page_request.limit)
    )
    return stmt, page_stmt


async def paginate(
    session: AsyncSession,
    stmt: Select[Any],
    page_request: PageRequest,
    columns: QueryColumns,
) -> tuple[list[Any], int]:
    """Run COUNT over the filtered statement, then fetch the requested page."""
    filtered_stmt, page_stmt = apply_page_request(stmt, page_request, columns)

    count_stmt = select(func.count()).select_from(filtered_stmt.subquery())
    total = int((await session.scalar(count_stmt)) or 0)

    items = (await session.scalars(page_stmt)).all()
    return list(items), total


class PageResponse(BaseModel, Generic[T]):
    """Generic paginated response."""

    data: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, data: list[T], total: int, page: int, page_size: int) -> "PageResponse[T]":
        total_pages = (total + page_size - 1) // page_size
        return cls(
            data=data,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def build_page_response(data: list[T], total: int, page_request: PageRequest) -> PageResponse[T]:
    """Build page object from query result and request."""
    return PageResponse.create(data, total, page_request.page, page_request.page_size)
