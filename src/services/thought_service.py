"""Thought service: listings, CRUD with ownership checks, and the like toggle."""

import logging
import uuid
from typing import Any

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Query, Session, selectinload

from src.exceptions import ForbiddenError, NotFoundError
from src.models.enums import Category
from src.models.thought import Thought, ThoughtLike
from src.services.query import (
    apply_sort,
    build_pagination,
    filter_by_category,
    filter_by_min_hearts,
    filter_newer_than,
    paginate,
    parse_sort,
)

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def is_owner(thought: Thought, user_id: uuid.UUID | None) -> bool:
    """True when ``user_id`` owns the thought. Anonymous thoughts have no owner."""
    if thought.owner_id is None or user_id is None:
        return False
    return uuid.UUID(str(thought.owner_id)) == uuid.UUID(str(user_id))


class ThoughtService:
    """Service for thought-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(Thought).options(
            selectinload(Thought.owner), selectinload(Thought.likes)
        )

    def _page(
        self, query: Query, sort: str | None, page: Any, limit: Any
    ) -> tuple[list[Thought], dict[str, Any]]:
        """Count the filtered query, then fetch one sorted page of it."""
        requested = paginate(page, limit)
        spec = parse_sort(sort)
        total_count = query.order_by(None).count()
        thoughts = (
            apply_sort(query, spec.field, spec.descending)
            .offset(requested.offset)
            .limit(requested.limit)
            .all()
        )
        return thoughts, build_pagination(requested, total_count)

    def _filtered(
        self,
        query: Query,
        category: str | None = None,
        min_hearts: Any = None,
        newer_than: Any = None,
    ) -> Query:
        query = filter_by_category(query, category)
        query = filter_by_min_hearts(query, min_hearts)
        return filter_newer_than(query, newer_than)

    def list_thoughts(
        self,
        *,
        category: str | None = None,
        min_hearts: Any = None,
        newer_than: Any = None,
        sort: str | None = None,
        page: Any = None,
        limit: Any = None,
    ) -> tuple[list[Thought], dict[str, Any]]:
        """Filtered, sorted, paginated thoughts plus pagination metadata."""
        query = self._filtered(self._base_query(), category, min_hearts, newer_than)
        return self._page(query, sort, page, limit)

    def list_user_thoughts(
        self,
        user_id: uuid.UUID,
        *,
        category: str | None = None,
        min_hearts: Any = None,
        newer_than: Any = None,
        sort: str | None = None,
        page: Any = None,
        limit: Any = None,
    ) -> tuple[list[Thought], dict[str, Any]]:
        """Thoughts owned by ``user_id``."""
        query = self._base_query().filter(Thought.owner_id == user_id)
        query = self._filtered(query, category, min_hearts, newer_than)
        return self._page(query, sort, page, limit)

    def list_liked_thoughts(
        self,
        user_id: uuid.UUID,
        *,
        sort: str | None = None,
        page: Any = None,
        limit: Any = None,
    ) -> tuple[list[Thought], dict[str, Any]]:
        """Thoughts whose liked-by set contains ``user_id``."""
        query = self._base_query().filter(Thought.likes.any(ThoughtLike.user_id == user_id))
        return self._page(query, sort, page, limit)

    def get_thought(self, thought_id: uuid.UUID) -> Thought:
        thought = self._base_query().filter(Thought.id == thought_id).first()
        if thought is None:
            raise NotFoundError(f"Thought with ID '{thought_id}' does not exist")
        return thought

    def create_thought(
        self,
        message: str,
        category: Category = Category.GENERAL,
        owner_id: uuid.UUID | None = None,
    ) -> Thought:
        """Create a thought; ``owner_id=None`` posts anonymously."""
        thought = Thought(
            message=message.strip(),
            category=Category(category).value,
            owner_id=owner_id,
            hearts=0,
        )
        self.db.add(thought)
        self.db.commit()
        logger.info(f"Created thought {thought.id} (owner={owner_id or 'anonymous'})")
        return self.get_thought(thought.id)

    def _get_owned(self, thought_id: uuid.UUID, user_id: uuid.UUID, action: str) -> Thought:
        thought = self.get_thought(thought_id)
        if not is_owner(thought, user_id):
            raise ForbiddenError(f"You can only {action} your own thoughts")
        return thought

    def update_message(self, thought_id: uuid.UUID, user_id: uuid.UUID, message: str) -> Thought:
        """Replace the message of a thought the caller owns."""
        thought = self._get_owned(thought_id, user_id, "edit")
        thought.message = message.strip()
        self.db.commit()
        logger.info(f"User {user_id} edited thought {thought_id}")
        return self.get_thought(thought_id)

    def delete_thought(self, thought_id: uuid.UUID, user_id: uuid.UUID) -> dict[str, Any]:
        """Delete a thought the caller owns and echo what was removed."""
        thought = self._get_owned(thought_id, user_id, "delete")
        deleted = {"id": thought.id, "message": thought.message}
        self.db.delete(thought)
        self.db.commit()
        logger.info(f"User {user_id} deleted thought {thought_id}")
        return deleted

    def toggle_like(self, thought_id: uuid.UUID, user_id: uuid.UUID) -> Thought:
        """Like the thought if ``user_id`` hasn't, otherwise unlike it.

        The membership change and the hearts adjustment run in one transaction
        as conditional SQL statements, with hearts computed in the database,
        so concurrent toggles from different users never lose an update.
        """
        locked = (
            self.db.query(Thought.id).filter(Thought.id == thought_id).with_for_update().first()
        )
        if locked is None:
            raise NotFoundError(f"Thought with ID '{thought_id}' does not exist")

        removed = self.db.execute(
            delete(ThoughtLike).where(
                ThoughtLike.thought_id == thought_id, ThoughtLike.user_id == user_id
            )
        ).rowcount
        if removed:
            delta = -removed
        else:
            delta = self._add_like(thought_id, user_id)

        if delta:
            self.db.execute(
                update(Thought)
                .where(Thought.id == thought_id)
                .values(hearts=Thought.hearts + delta)
                .execution_options(synchronize_session=False)
            )
        self.db.commit()
        logger.debug(f"User {user_id} toggled like on {thought_id} (delta={delta})")

        # Drop stale identity-map state so the response reflects the new rows
        self.db.expire_all()
        return self.get_thought(thought_id)

    def _add_like(self, thought_id: uuid.UUID, user_id: uuid.UUID) -> int:
        """Insert the like row if absent; returns how many rows were added."""
        dialect = self.db.get_bind().dialect.name
        values = {"thought_id": thought_id, "user_id": user_id}
        insert_fn = _UPSERT_INSERTS.get(dialect)
        if insert_fn is not None:
            stmt = insert_fn(ThoughtLike).values(**values).on_conflict_do_nothing()
            return self.db.execute(stmt).rowcount
        # Other backends: a duplicate from a racing request rolls back only the savepoint
        try:
            with self.db.begin_nested():
                self.db.add(ThoughtLike(**values))
                self.db.flush()
        except IntegrityError:
            return 0
        return 1
