"""
Pytest configuration and fixtures for backend tests.
"""

import itertools
from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from practice_api.main import app
from practice_api.models import Base, Organization
from practice_common.infrastructure.db import build_session_factory
from practice_common.security.context import ORGANIZATION_HEADER, USER_HEADER


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = build_session_factory(engine)

ORG_A = "00000000-0000-0000-0000-00000000000a"
ORG_B = "00000000-0000-0000-0000-00000000000b"
USER_ID = "00000000-0000-0000-0000-0000000000u1"


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime | None = None):
        self._ticks = itertools.count()
        self._start = start or datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
        self.last = self._start

    def __call__(self) -> datetime:
        self.last = self._start + timedelta(seconds=next(self._ticks))
        return self.last


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def seed_organizations(db_session):
    """Two tenants so isolation can be checked."""
    orgs = [
        Organization(id=ORG_A, name="North Clinic", slug="north"),
        Organization(id=ORG_B, name="South Clinic", slug="south"),
    ]
    db_session.add_all(orgs)
    db_session.commit()
    return orgs


@pytest.fixture(scope="function")
def client(db_session, seed_organizations):
    """
    Test client sharing the in-memory database.

    Each request gets its own session from the test factory, as in production.
    """
    app.state.session_factory = TestingSessionLocal

    with TestClient(app) as test_client:
        yield test_client

    app.state.session_factory = None


@pytest.fixture
def headers():
    """Request context headers for organization A."""
    return {ORGANIZATION_HEADER: ORG_A, USER_HEADER: USER_ID}


@pytest.fixture
def other_org_headers():
    return {ORGANIZATION_HEADER: ORG_B, USER_HEADER: USER_ID}


def patient_data(**overrides):
    """Minimal valid patient values."""
    data = {
        "first_name": "Ana",
        "last_name": "Lopez",
        "date_of_birth": date(1990, 5, 17),
        "sex": "female",
    }
    data.update(overrides)
    return data


def item_data(**overrides):
    """Minimal valid product values."""
    data = {
        "name": "Bandage",
        "type": "product",
        "price": 10,
    }
    data.update(overrides)
    return data
