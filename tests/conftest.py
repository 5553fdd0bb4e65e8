"""Shared test fixtures and configuration."""
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rollcall.main import app
from rollcall.db.base import Base
from rollcall.db.models import Profile
from rollcall.api.deps import get_db
from rollcall.core.constants import ROLE_ADMIN, ROLE_ATTENDEE
from rollcall.core.security import create_access_token
from rollcall.services.identity import Identity


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

ADMIN_ID = "admin-0001"
ATTENDEE_ID = "attendee-0001"
OTHER_ATTENDEE_ID = "attendee-0002"
NEWCOMER_ID = "newcomer-0001"

NEW_YORK = ZoneInfo("America/New_York")


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    from rollcall.core.rate_limit import limiter

    limiter.reset()
    if "rate_limit" in request.keywords:
        yield
    else:
        # Decorators are applied at import time, so switch the limiter off instead of patching it
        limiter.enabled = False
        try:
            yield
        finally:
            limiter.enabled = True
    limiter.reset()


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_profile(db_session, user_id, full_name, role=ROLE_ATTENDEE, email=None):
    now = datetime.now(timezone.utc)
    profile = Profile(
        user_id=user_id,
        full_name=full_name,
        email=email or f"{user_id}@example.com",
        role=role,
        created_at=now,
        updated_at=now,
    )
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


def bearer(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def admin_profile(db_session):
    return make_profile(db_session, ADMIN_ID, "Grace Hopper", role=ROLE_ADMIN)


@pytest.fixture
def attendee_profile(db_session):
    return make_profile(db_session, ATTENDEE_ID, "Ada Lovelace")


@pytest.fixture
def other_attendee_profile(db_session):
    return make_profile(db_session, OTHER_ATTENDEE_ID, "Alan Turing")


@pytest.fixture
def admin_identity(admin_profile):
    return Identity(id=ADMIN_ID, role=ROLE_ADMIN, has_profile=True)


@pytest.fixture
def attendee_identity(attendee_profile):
    return Identity(id=ATTENDEE_ID, role=ROLE_ATTENDEE, has_profile=True)


@pytest.fixture
def other_attendee_identity(other_attendee_profile):
    return Identity(id=OTHER_ATTENDEE_ID, role=ROLE_ATTENDEE, has_profile=True)


@pytest.fixture
def admin_headers(admin_profile):
    return bearer(ADMIN_ID)


@pytest.fixture
def attendee_headers(attendee_profile):
    return bearer(ATTENDEE_ID)


@pytest.fixture
def other_attendee_headers(other_attendee_profile):
    return bearer(OTHER_ATTENDEE_ID)


@pytest.fixture
def newcomer_headers():
    """Valid credential for someone who has never saved a profile."""
    return bearer(NEWCOMER_ID)
