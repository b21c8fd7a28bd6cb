"""Endpoints scoped to the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import CurrentUser, get_current_user, get_thought_service
from src.api.validation import validate_thoughts_query
from src.schemas.pagination import LikedThoughtsResponse, PaginationMeta, UserThoughtsResponse
from src.schemas.thought import ThoughtResponse
from src.services.rate_limit import general_rate_limit
from src.services.thought_service import ThoughtService

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(general_rate_limit)])


@router.get("/me/thoughts", response_model=UserThoughtsResponse)
def get_my_thoughts(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ThoughtService, Depends(get_thought_service)],
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    category: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    min_hearts: str | None = Query(default=None, alias="minHearts"),
    newer_than: str | None = Query(default=None, alias="newerThan"),
):
    """Thoughts created by the current user."""
    validate_thoughts_query(page, limit, category, min_hearts, newer_than)

    thoughts, pagination = service.list_user_thoughts(
        current_user.id,
        category=category,
        min_hearts=min_hearts,
        newer_than=newer_than,
        sort=sort,
        page=page,
        limit=limit,
    )
    return UserThoughtsResponse(
        thoughts=[ThoughtResponse.model_validate(t) for t in thoughts],
        pagination=PaginationMeta(**pagination),
    )


@router.get("/me/likes", response_model=LikedThoughtsResponse)
def get_my_likes(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ThoughtService, Depends(get_thought_service)],
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    sort: str | None = Query(default=None),
):
    """Thoughts the current user has liked."""
    thoughts, pagination = service.list_liked_thoughts(
        current_user.id, sort=sort, page=page, limit=limit
    )
    return LikedThoughtsResponse(
        liked_thoughts=[ThoughtResponse.model_validate(t) for t in thoughts],
        pagination=PaginationMeta(**pagination),
    )
