"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so configure the environment first
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("BCRYPT_ROUNDS", "10")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src import models  # noqa: E402, F401
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402

TEST_PASSWORD = "Password123"


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client, email: str, name: str) -> AuthHeaders:
    """Sign up a user and return bearer headers for them."""
    response = client.post(
        "/auth/signup",
        json={"email": email, "password": TEST_PASSWORD, "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['accessToken']}"},
        user_id=data["user"]["_id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return signup(client, "test@example.com", "Test User")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return signup(client, "other@example.com", "Other User")


@pytest.fixture
def create_thought(client):
    """Post a thought and return its JSON."""

    def _create(headers=None, message="Hello world!", category="General", anonymous=False):
        url = "/thoughts?allowAnonymous=true" if anonymous else "/thoughts"
        response = client.post(
            url, headers=headers or {}, json={"message": message, "category": category}
        )
        assert response.status_code == 201, response.json()
        return response.json()

    return _create
