"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the environment must be ready first
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789-abcdefghij")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, build_engine, get_db  # noqa: E402
from src.main import app  # noqa: E402

ALICE = {"name": "Alice", "email": "a@x.com", "password": "Secret123"}
BOB = {"name": "Bob", "email": "b@x.com", "password": "Hunter2go"}


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from src import models  # noqa: F401

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
def session_factory():
    """Independent sessions for tests that simulate concurrent requests."""
    return TestingSessionLocal


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
def register(client):
    """Factory that registers a user and returns auth headers for them."""

    def _register(name: str, email: str, password: str) -> AuthHeaders:
        response = client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return AuthHeaders(
            {"Authorization": f"Bearer {data['access_token']}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Register Alice and return her auth headers."""
    return register(**ALICE)


@pytest.fixture
def other_auth_headers(register):
    """Register Bob and return his auth headers."""
    return register(**BOB)
