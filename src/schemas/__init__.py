"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, ProfileResponse, UserLogin, UserResponse, UserSignup
from src.schemas.pagination import (
    AppliedFilters,
    LikedThoughtsResponse,
    PaginationMeta,
    ThoughtListResponse,
    UserThoughtsResponse,
)
from src.schemas.thought import (
    OwnerSummary,
    ThoughtCreate,
    ThoughtDeleteResponse,
    ThoughtResponse,
    ThoughtUpdate,
)

__all__ = [
    "UserSignup",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
    "ThoughtCreate",
    "ThoughtUpdate",
    "ThoughtResponse",
    "ThoughtDeleteResponse",
    "OwnerSummary",
    "PaginationMeta",
    "AppliedFilters",
    "ThoughtListResponse",
    "UserThoughtsResponse",
    "LikedThoughtsResponse",
]
