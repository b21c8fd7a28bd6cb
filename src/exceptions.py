"""API error types.

Services raise these; ``src.api.exception_handlers`` turns them into
``{"error": ..., "details": ...}`` JSON responses.
"""

from typing import Any

from fastapi import status


class APIError(Exception):
    """Base class for errors with a known HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, details: Any = None, *, headers: dict[str, str] | None = None):
        super().__init__(details)
        self.details = details
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "details": self.details}


class BadRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class UnauthorizedError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, details: Any = None):
        super().__init__(details, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class ValidationFailedError(APIError):
    """Field-level validation failure; details is always a list."""

    status_code = 422
    error = "Validation Error"

    def __init__(self, details: list[dict[str, Any]]):
        super().__init__(details)


class BadQueryError(BadRequestError):
    """One or more query parameters are unusable; details lists each problem."""

    error = "Bad query parameters"


class TooManyRequestsError(APIError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error = "Too Many Requests"
