"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime

import pytest

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].replace("/gms", "/gms_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

# The application engine is built at import time, so point it at the test database first
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from gms import models  # noqa: E402, F401
from gms.database import Base, get_db  # noqa: E402
from gms.main import app  # noqa: E402
from gms.models.user import User  # noqa: E402
from gms.services.grocery_store import GroceryStore  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Wednesday of ISO week 42, 2026
NOW = datetime(2026, 10, 14, 12, 0, tzinfo=UTC)


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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


@pytest.fixture
def user(db):
    """A user owning groceries in service-level tests."""
    test_user = User(
        username="jane",
        full_name="Jane Doe",
        email="jane@example.com",
        password_hash="fake",
        diet_preference="None",
    )
    db.add(test_user)
    db.commit()
    return test_user


@pytest.fixture
def other_user(db):
    """A second user, to check owner scoping."""
    test_user = User(username="john", email="john@example.com", password_hash="fake")
    db.add(test_user)
    db.commit()
    return test_user


@pytest.fixture
def now():
    """Frozen "current time" for service-level tests."""
    return NOW


@pytest.fixture
def store(db, now):
    """Grocery store with a clock frozen at now."""
    return GroceryStore(db, clock=lambda: now)


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


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "email": "test@example.com",
            "password": "testpass123",
            "username": "tester",
            "full_name": "Test User",
        },
    )
    assert response.status_code == 201
    data = response.json()
    token = data["access_token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def second_db():
    """An independent session on the same database, as a concurrent writer would hold."""
    session = TestingSessionLocal()
    yield session
    session.rollback()
    session.close()
