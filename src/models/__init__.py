"""SQLAlchemy models."""

from src.models.thought import Thought, ThoughtLike
from src.models.user import User

__all__ = [
    "User",
    "Thought",
    "ThoughtLike",
]
