"""
Pytest configuration and fixtures for LIRA portal API tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lira_portal.database import Base, get_db, get_session_factory
from lira_portal.limiter import limiter
from lira_portal.main import app
from lira_portal.models import Department, Profile
from lira_portal.auth import get_password_hash, create_access_token

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()

    app.dependency_overrides[get_db] = get_test_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


def make_profile(db, email, role, full_name, password="testpassword123", **fields):
    profile = Profile(
        email=email,
        hashed_password=get_password_hash(password),
        full_name=full_name,
        role=role,
        **fields,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def headers_for(profile):
    token = create_access_token({"sub": str(profile.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def intern(db):
    return make_profile(db, "intern@example.com", "intern", "Ivy Intern")


@pytest.fixture(scope="function")
def other_intern(db):
    return make_profile(db, "other@example.com", "intern", "Oscar Other")


@pytest.fixture(scope="function")
def staff(db):
    return make_profile(db, "staff@example.com", "staff", "Sara Staff")


@pytest.fixture(scope="function")
def admin(db):
    return make_profile(db, "admin@example.com", "admin", "Adam Admin")


@pytest.fixture(scope="function")
def intern_headers(intern):
    return headers_for(intern)


@pytest.fixture(scope="function")
def other_intern_headers(other_intern):
    return headers_for(other_intern)


@pytest.fixture(scope="function")
def staff_headers(staff):
    return headers_for(staff)


@pytest.fixture(scope="function")
def admin_headers(admin):
    return headers_for(admin)


@pytest.fixture(scope="function")
def department(db):
    dept = Department(name="Computer Science", description="Software placements")
    db.add(dept)
    db.commit()
    db.refresh(dept)
    return dept


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        return self._payload


class FakeSession:
    """Records POSTs and replays queued responses or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_session_cls():
    return FakeSession


@pytest.fixture
def fake_response_cls():
    return FakeResponse


@pytest.fixture
def profile_factory(db):
    """Create extra profiles inside a test."""
    def factory(email, role, full_name, **fields):
        return make_profile(db, email, role, full_name, **fields)
    return factory


@pytest.fixture
def auth_headers():
    return headers_for
