"""Query building helpers for thought listings.

Everything here is pure: functions take a SQLAlchemy ``Query`` (or raw request
values) and return a new one without touching the database. Missing or
unusable input leaves the query unchanged instead of raising; rejecting bad
input is the job of ``src.api.validation``.
"""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Query

from src.models.enums import SortField
from src.models.thought import Thought

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

SORT_COLUMNS = {
    SortField.CREATED_AT: Thought.created_at,
    SortField.UPDATED_AT: Thought.updated_at,
    SortField.HEARTS: Thought.hearts,
    SortField.CATEGORY: Thought.category,
}


@dataclass(frozen=True)
class SortSpec:
    field: SortField
    descending: bool


DEFAULT_SORT = SortSpec(SortField.CREATED_AT, descending=True)


@dataclass(frozen=True)
class Page:
    """A clamped, 1-indexed page request."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_int(value: Any) -> int | None:
    """Parse an integer query value, returning None when it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO 8601 date or datetime; naive values are taken as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_sort(sort: str | None) -> SortSpec:
    """Turn ``"hearts"`` / ``"-hearts"`` into a SortSpec.

    Fields outside the allow-list fall back to newest-first.
    """
    if not sort:
        return DEFAULT_SORT
    sort = sort.strip()
    descending = sort.startswith("-")
    name = sort[1:] if descending else sort
    try:
        field = SortField(name)
    except ValueError:
        return DEFAULT_SORT
    return SortSpec(field, descending)


def filter_by_category(query: Query, category: str | None) -> Query:
    """Restrict to a category, ignoring case."""
    if category is None or not category.strip():
        return query
    return query.filter(func.lower(Thought.category) == category.strip().lower())


def filter_by_min_hearts(query: Query, min_hearts: Any) -> Query:
    threshold = parse_int(min_hearts)
    if threshold is None or threshold < 0:
        return query
    return query.filter(Thought.hearts >= threshold)


def filter_newer_than(query: Query, newer_than: Any) -> Query:
    since = parse_datetime(newer_than)
    if since is None:
        return query
    return query.filter(Thought.created_at >= since)


def apply_sort(query: Query, field: SortField | str | None, descending: bool = True) -> Query:
    """Order by an allow-listed field; anything else gets the default order.

    Ties are broken by id so page boundaries stay stable.
    """
    try:
        column = SORT_COLUMNS[SortField(field)]
    except ValueError:
        column = SORT_COLUMNS[DEFAULT_SORT.field]
        descending = DEFAULT_SORT.descending
    if descending:
        return query.order_by(column.desc(), Thought.id.desc())
    return query.order_by(column.asc(), Thought.id.asc())


def paginate(page: Any = None, page_size: Any = None) -> Page:
    """Clamp raw page/limit values into a usable Page."""
    page_num = parse_int(page)
    limit = parse_int(page_size)
    if page_num is None or page_num < 1:
        page_num = 1
    if limit is None or limit < 1:
        limit = DEFAULT_PAGE_SIZE
    limit = min(limit, MAX_PAGE_SIZE)
    return Page(page=page_num, limit=limit)


def build_pagination(page: Page, total_count: int) -> dict[str, Any]:
    """Pagination metadata for a page over ``total_count`` matching rows."""
    total_pages = math.ceil(total_count / page.limit)
    return {
        "current_page": page.page,
        "total_pages": total_pages,
        "total_count": total_count,
        "has_next_page": page.page < total_pages,
        "has_prev_page": page.page > 1,
    }
