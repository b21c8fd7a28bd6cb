"""Thought and like models."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import Category
from src.models.mixins import TimestampMixin, utc_now


class Thought(Base, TimestampMixin):
    """A short message, optionally owned, that users can like."""

    __tablename__ = "thoughts"
    __table_args__ = (CheckConstraint("hearts >= 0", name="ck_thoughts_hearts_non_negative"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    message = Column(String(140), nullable=False)
    category = Column(String(20), nullable=False, default=Category.GENERAL.value, index=True)
    # Denormalized count of thought_likes rows; only the like toggle changes it
    hearts = Column(Integer, nullable=False, default=0, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    owner = relationship("User", backref="thoughts")
    likes = relationship(
        "ThoughtLike",
        back_populates="thought",
        cascade="all, delete-orphan",
        order_by="ThoughtLike.created_at",
    )

    @property
    def liked_by(self) -> list[uuid.UUID]:
        """User ids of everyone currently liking this thought."""
        return [like.user_id for like in self.likes]


class ThoughtLike(Base):
    """Membership of a user in a thought's liked-by set."""

    __tablename__ = "thought_likes"

    # Composite key gives the liked-by set its uniqueness
    thought_id = Column(
        Uuid, ForeignKey("thoughts.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    thought = relationship("Thought", back_populates="likes")
