"""FastAPI dependencies for authentication and services."""

import uuid
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import UnauthorizedError
from src.services.auth import decode_access_token, get_user_by_id
from src.services.thought_service import ThoughtService

# auto_error=False so a missing header reaches our own 401 message
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Minimal identity attached to an authenticated request."""

    id: uuid.UUID
    email: str
    name: str


def resolve_user(db: Session, token: str) -> CurrentUser:
    """Verify a bearer token and load the user it names."""
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError:
        raise UnauthorizedError("Access token has expired") from None
    except JWTError:
        raise UnauthorizedError("Invalid access token") from None

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise UnauthorizedError("Invalid access token") from None

    user = get_user_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found")

    return CurrentUser(id=user.id, email=user.email, name=user.name)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Get the current authenticated user from the bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token is required")
    return resolve_user(db, credentials.credentials)


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser | None:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return resolve_user(db, credentials.credentials)
    except UnauthorizedError:
        return None


def get_thought_author(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    allow_anonymous: Annotated[bool, Query(alias="allowAnonymous")] = False,
) -> CurrentUser | None:
    """Owner for a new thought: None with ``?allowAnonymous=true``, else the caller.

    Without the flag the token is checked exactly as on any protected route.
    """
    if allow_anonymous:
        return None
    return get_current_user(credentials, db)


def get_thought_service(
    db: Annotated[Session, Depends(get_db)],
) -> ThoughtService:
    """Get thought service with dependencies."""
    return ThoughtService(db)
