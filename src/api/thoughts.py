"""Thought API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    CurrentUser,
    get_current_user,
    get_thought_author,
    get_thought_service,
)
from src.api.validation import parse_thought_id, validate_thoughts_query
from src.schemas.pagination import AppliedFilters, PaginationMeta, ThoughtListResponse
from src.schemas.thought import (
    DeletedThought,
    ThoughtCreate,
    ThoughtDeleteResponse,
    ThoughtResponse,
    ThoughtUpdate,
)
from src.services.rate_limit import general_rate_limit, thought_creation_rate_limit
from src.services.thought_service import ThoughtService

router = APIRouter(prefix="/thoughts", tags=["thoughts"])


@router.get("", response_model=ThoughtListResponse, dependencies=[Depends(general_rate_limit)])
def list_thoughts(
    service: Annotated[ThoughtService, Depends(get_thought_service)],
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    category: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    min_hearts: str | None = Query(default=None, alias="minHearts"),
    newer_than: str | None = Query(default=None, alias="newerThan"),
):
    """List thoughts with filtering, sorting and pagination."""
    validate_thoughts_query(page, limit, category, min_hearts, newer_than)

    thoughts, pagination = service.list_thoughts(
        category=category,
        min_hearts=min_hearts,
        newer_than=newer_than,
        sort=sort,
        page=page,
        limit=limit,
    )
    return ThoughtListResponse(
        thoughts=[ThoughtResponse.model_validate(t) for t in thoughts],
        pagination=PaginationMeta(**pagination),
        filters=AppliedFilters(
            category=category, min_hearts=min_hearts, newer_than=newer_than, sort=sort
        ),
    )


@router.post(
    "",
    response_model=ThoughtResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(thought_creation_rate_limit)],
)
def create_thought(
    thought_data: ThoughtCreate,
    service: Annotated[ThoughtService, Depends(get_thought_service)],
    author: Annotated[CurrentUser | None, Depends(get_thought_author)],
):
    """Create a thought; ``?allowAnonymous=true`` posts without an owner."""
    owner_id = author.id if author else None
    thought = service.create_thought(thought_data.message, thought_data.category, owner_id)
    return ThoughtResponse.model_validate(thought)


@router.get(
    "/{thought_id}", response_model=ThoughtResponse, dependencies=[Depends(general_rate_limit)]
)
def get_thought(
    thought_id: str,
    service: Annotated[ThoughtService, Depends(get_thought_service)],
):
    """Get a single thought."""
    thought = service.get_thought(parse_thought_id(thought_id))
    return ThoughtResponse.model_validate(thought)


@router.put(
    "/{thought_id}", response_model=ThoughtResponse, dependencies=[Depends(general_rate_limit)]
)
def update_thought(
    thought_id: str,
    thought_data: ThoughtUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ThoughtService, Depends(get_thought_service)],
):
    """Edit the message of a thought (owner only)."""
    thought = service.update_message(
        parse_thought_id(thought_id), current_user.id, thought_data.message
    )
    return ThoughtResponse.model_validate(thought)


@router.delete(
    "/{thought_id}",
    response_model=ThoughtDeleteResponse,
    dependencies=[Depends(general_rate_limit)],
)
def delete_thought(
    thought_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ThoughtService, Depends(get_thought_service)],
):
    """Delete a thought (owner only)."""
    deleted = service.delete_thought(parse_thought_id(thought_id), current_user.id)
    return ThoughtDeleteResponse(deleted_thought=DeletedThought(**deleted))


@router.post(
    "/{thought_id}/like",
    response_model=ThoughtResponse,
    dependencies=[Depends(general_rate_limit)],
)
def toggle_like(
    thought_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ThoughtService, Depends(get_thought_service)],
):
    """Like the thought, or remove the caller's like if already given."""
    thought = service.toggle_like(parse_thought_id(thought_id), current_user.id)
    return ThoughtResponse.model_validate(thought)
