"""Thought schemas."""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from src.models.enums import Category

Message = Annotated[str, StringConstraints(strip_whitespace=True, min_length=5, max_length=140)]


class ThoughtCreate(BaseModel):
    """Create a new thought."""

    message: Message
    category: Category = Category.GENERAL


class ThoughtUpdate(BaseModel):
    """Edit a thought's message."""

    message: Message


class OwnerSummary(BaseModel):
    """Public fields of a thought's owner."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(serialization_alias="_id")
    name: str
    email: str


class ThoughtResponse(BaseModel):
    """Thought response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(serialization_alias="_id")
    message: str
    category: str
    hearts: int
    liked_by: list[uuid.UUID] = Field(serialization_alias="likedBy")
    owner: OwnerSummary | None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class DeletedThought(BaseModel):
    id: uuid.UUID
    message: str


class ThoughtDeleteResponse(BaseModel):
    """Confirmation returned after deleting a thought."""

    message: str = "Thought deleted successfully"
    deleted_thought: DeletedThought = Field(serialization_alias="deletedThought")
