"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import CurrentUser, get_current_user
from src.database import get_db
from src.exceptions import NotFoundError, UnauthorizedError
from src.schemas.auth import AuthResponse, ProfileResponse, UserLogin, UserResponse, UserSignup
from src.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_id,
)
from src.services.rate_limit import auth_rate_limit

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(auth_rate_limit)],
)
def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    name = user_data.name or user_data.email.split("@")[0]
    user = create_user(db, user_data.email, user_data.password, name)

    access_token = create_access_token(user.id, user.email)

    return AuthResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
        access_token=access_token,
    )


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(auth_rate_limit)])
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        # Same message for unknown email and wrong password
        raise UnauthorizedError("Invalid email or password")

    access_token = create_access_token(user.id, user.email)

    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        access_token=access_token,
    )


@router.get("/me", response_model=ProfileResponse)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user information."""
    user = get_user_by_id(db, current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return ProfileResponse(user=UserResponse.model_validate(user))
