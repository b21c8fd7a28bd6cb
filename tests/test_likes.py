"""Like toggle tests."""

import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from src.models.thought import Thought, ThoughtLike
from src.services import thought_service
from src.services.auth import create_user
from src.services.thought_service import ThoughtService


def test_like_scenario(client, auth_headers, create_thought):
    """Test create, like, and unlike by the same user."""
    thought = create_thought(auth_headers, message="Hello world!", category="General")
    assert thought["hearts"] == 0
    assert thought["likedBy"] == []

    liked = client.post(f"/thoughts/{thought['_id']}/like", headers=auth_headers)
    assert liked.status_code == 200
    assert liked.json()["hearts"] == 1
    assert liked.json()["likedBy"] == [auth_headers.user_id]

    unliked = client.post(f"/thoughts/{thought['_id']}/like", headers=auth_headers)
    assert unliked.status_code == 200
    assert unliked.json()["hearts"] == 0
    assert unliked.json()["likedBy"] == []


def test_double_toggle_restores_state(client, auth_headers, other_auth_headers, create_thought):
    """Test that two toggles by one user leave other likes untouched."""
    thought = create_thought(auth_headers)
    url = f"/thoughts/{thought['_id']}/like"
    before = client.post(url, headers=other_auth_headers).json()

    client.post(url, headers=auth_headers)
    after = client.post(url, headers=auth_headers).json()

    assert after["hearts"] == before["hearts"] == 1
    assert after["likedBy"] == before["likedBy"] == [other_auth_headers.user_id]


def test_hearts_match_liked_by(client, auth_headers, other_auth_headers, create_thought):
    """Test hearts == len(likedBy) across a sequence of toggles."""
    thought = create_thought(auth_headers)
    url = f"/thoughts/{thought['_id']}/like"
    sequence = [auth_headers, other_auth_headers, auth_headers, other_auth_headers, auth_headers]

    for headers in sequence:
        data = client.post(url, headers=headers).json()
        assert data["hearts"] == len(data["likedBy"])
        assert len(set(data["likedBy"])) == len(data["likedBy"])

    assert data["likedBy"] == [auth_headers.user_id]


def test_anonymous_thought_can_be_liked(client, auth_headers, create_thought):
    """Test liking a thought with no owner."""
    thought = create_thought(anonymous=True)
    response = client.post(f"/thoughts/{thought['_id']}/like", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["hearts"] == 1


def test_like_requires_auth(client, create_thought):
    """Test that liking without a token fails."""
    thought = create_thought(anonymous=True)
    response = client.post(f"/thoughts/{thought['_id']}/like")
    assert response.status_code == 401


def test_like_not_found(client, auth_headers):
    """Test liking a thought that does not exist."""
    response = client.post(f"/thoughts/{uuid.uuid4()}/like", headers=auth_headers)
    assert response.status_code == 404


def test_like_invalid_id(client, auth_headers):
    """Test liking with a malformed id."""
    response = client.post("/thoughts/xyz/like", headers=auth_headers)
    assert response.status_code == 400


def test_add_like_is_set_insert(db):
    """Test that inserting an existing like row adds nothing."""
    user = create_user(db, "setuser@example.com", "Password123", "Set User")
    service = ThoughtService(db)
    thought = service.create_thought("Set semantics", owner_id=None)

    assert service._add_like(thought.id, user.id) == 1
    assert service._add_like(thought.id, user.id) == 0
    db.commit()
    assert db.query(ThoughtLike).filter(ThoughtLike.thought_id == thought.id).count() == 1


def test_add_like_fallback_uses_savepoint(db, monkeypatch):
    """Test that backends without ON CONFLICT still treat a duplicate like as a no-op."""
    monkeypatch.setattr(thought_service, "_UPSERT_INSERTS", {})
    user = create_user(db, "portable@example.com", "Password123", "Portable User")
    service = ThoughtService(db)
    thought = service.create_thought("Portable backend", owner_id=None)

    assert service.toggle_like(thought.id, user.id).hearts == 1
    assert service._add_like(thought.id, user.id) == 0
    db.commit()

    assert db.query(ThoughtLike).filter(ThoughtLike.thought_id == thought.id).count() == 1
    assert service.toggle_like(thought.id, user.id).hearts == 0


@pytest.fixture
def writer_bind(db):
    """Engine for worker threads.

    SQLite transactions are opened with BEGIN IMMEDIATE so concurrent writers
    queue on the database lock instead of failing with SQLITE_BUSY.
    """
    bind = db.get_bind()
    if bind.dialect.name != "sqlite":
        yield bind
        return

    engine = create_engine(bind.url, connect_args={"check_same_thread": False, "timeout": 30})

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    yield engine
    engine.dispose()


def test_concurrent_likes_from_distinct_users(db, writer_bind):
    """Test that parallel toggles by N users end with hearts == N."""
    bind = writer_bind
    users = [
        create_user(db, f"liker{i}@example.com", "Password123", f"Liker {i}") for i in range(8)
    ]
    thought = ThoughtService(db).create_thought("Popular thought", owner_id=None)
    thought_id = thought.id
    user_ids = [user.id for user in users]
    make_session = sessionmaker(bind=bind, autoflush=False)

    def like(user_id):
        session = make_session()
        try:
            ThoughtService(session).toggle_like(thought_id, user_id)
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(like, user_ids))

    db.expire_all()
    stored = db.get(Thought, thought_id)
    assert stored.hearts == len(user_ids)
    assert sorted(stored.liked_by) == sorted(user_ids)


def test_likes_from_many_users_accumulate(db):
    """Test that N distinct likers give hearts == N."""
    service = ThoughtService(db)
    thought = service.create_thought("Crowd favourite", owner_id=None)
    user_ids = [
        create_user(db, f"fan{i}@example.com", "Password123", f"Fan {i}").id for i in range(6)
    ]

    for user_id in user_ids:
        result = service.toggle_like(thought.id, user_id)

    assert result.hearts == 6
    assert sorted(result.liked_by) == sorted(user_ids)
