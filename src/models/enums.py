"""Enums for model fields."""

from enum import StrEnum


class Category(StrEnum):
    """Fixed set of thought categories."""

    TRAVEL = "Travel"
    FAMILY = "Family"
    FOOD = "Food"
    HEALTH = "Health"
    FRIENDS = "Friends"
    HUMOR = "Humor"
    ENTERTAINMENT = "Entertainment"
    WEATHER = "Weather"
    ANIMALS = "Animals"
    GENERAL = "General"


class SortField(StrEnum):
    """Thought fields that may be used for ordering, by their public name."""

    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    HEARTS = "hearts"
    CATEGORY = "category"
