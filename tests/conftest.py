"""Pytest configuration and fixtures."""

import os
import tempfile

# Point the application at throwaway resources before it is imported
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="filevault-uploads-")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from filevault import models  # noqa: E402, F401
from filevault.api.dependencies import get_file_store  # noqa: E402
from filevault.database import Base, get_db  # noqa: E402
from filevault.main import app  # noqa: E402
from filevault.services.file_store import FileStore  # noqa: E402
from filevault.services.tokens import TokenService  # noqa: E402

TEST_PASSWORD = "pw123456"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores the username."""

    def __init__(self, *args, username: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.username = username


connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def file_store(tmp_path):
    """File store rooted in a per-test temporary directory."""
    return FileStore(tmp_path / "uploads")


@pytest.fixture
def token_service():
    """Token service with test-only signing settings."""
    return TokenService(
        secret="test-secret-key-that-is-long-enough-for-hs256",  # noqa: S106
        issuer="FileVault",
        audience="FileVaultClient",
    )


@pytest.fixture(scope="function")
def client(db, file_store):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: file_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client):
    """Return a helper that registers a user via the API and returns bearer headers."""

    def _register_and_login(username: str, email: str, password: str = TEST_PASSWORD):
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201

        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200
        token = response.json()["data"]["token"]

        return AuthHeaders({"Authorization": f"Bearer {token}"}, username=username)

    return _register_and_login


@pytest.fixture
def auth_headers(register_and_login):
    """Create a user and return auth headers with user info."""
    return register_and_login("alice", "a@x.com")


@pytest.fixture
def other_auth_headers(register_and_login):
    """Auth headers for a second, unrelated user."""
    return register_and_login("bob", "b@x.com")
