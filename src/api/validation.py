"""Request parameter validation that runs before any service logic."""

import uuid

from src.exceptions import BadQueryError, BadRequestError
from src.services.query import MAX_PAGE_SIZE, parse_datetime, parse_int


def parse_thought_id(raw_id: str) -> uuid.UUID:
    """Parse a path id, rejecting anything that isn't a UUID with a 400."""
    if not raw_id or not raw_id.strip():
        raise BadRequestError("ID parameter cannot be empty")
    try:
        return uuid.UUID(raw_id.strip())
    except ValueError:
        raise BadRequestError("Invalid thought ID format") from None


def validate_thoughts_query(
    page: str | None,
    limit: str | None,
    category: str | None,
    min_hearts: str | None,
    newer_than: str | None,
) -> None:
    """Collect every problem with the list query and raise them together.

    ``sort`` is not checked here: unknown sort fields fall back to the
    default order.
    """
    errors = []

    if page is not None:
        value = parse_int(page)
        if value is None or value < 1:
            errors.append("page must be a positive integer")

    if limit is not None:
        value = parse_int(limit)
        if value is None or value < 1 or value > MAX_PAGE_SIZE:
            errors.append(f"limit must be a positive integer between 1 and {MAX_PAGE_SIZE}")

    if category is not None and not category.strip():
        errors.append("category cannot be empty")

    if min_hearts is not None:
        value = parse_int(min_hearts)
        if value is None or value < 0:
            errors.append("minHearts must be a non-negative integer")

    if newer_than is not None and parse_datetime(newer_than) is None:
        errors.append(
            "newerThan must be a valid date (ISO 8601 format recommended, "
            "e.g., 2024-01-01T00:00:00Z)"
        )

    if errors:
        raise BadQueryError(errors)
