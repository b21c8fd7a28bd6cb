"""Paginated list responses."""

from pydantic import BaseModel, Field

from src.schemas.thought import ThoughtResponse


class PaginationMeta(BaseModel):
    """Page position within a filtered result set."""

    current_page: int = Field(serialization_alias="currentPage")
    total_pages: int = Field(serialization_alias="totalPages")
    total_count: int = Field(serialization_alias="totalCount")
    has_next_page: bool = Field(serialization_alias="hasNextPage")
    has_prev_page: bool = Field(serialization_alias="hasPrevPage")


class AppliedFilters(BaseModel):
    """Echo of the filter parameters a list request was made with."""

    category: str | None = None
    min_hearts: str | None = Field(None, serialization_alias="minHearts")
    newer_than: str | None = Field(None, serialization_alias="newerThan")
    sort: str | None = None


class ThoughtListResponse(BaseModel):
    thoughts: list[ThoughtResponse]
    pagination: PaginationMeta
    filters: AppliedFilters


class UserThoughtsResponse(BaseModel):
    thoughts: list[ThoughtResponse]
    pagination: PaginationMeta


class LikedThoughtsResponse(BaseModel):
    liked_thoughts: list[ThoughtResponse] = Field(serialization_alias="likedThoughts")
    pagination: PaginationMeta
