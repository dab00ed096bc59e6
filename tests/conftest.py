"""
Test configuration and fixtures
"""
import os
from datetime import datetime
from typing import Generator

import pytest

# Set testing environment before the app reads its settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from crm_insights.core.database import Base, SessionLocal, engine, get_db
from crm_insights.main import app
from crm_insights.schemas.analytics import Snapshot

# Monday, 19 October 2026, mid-afternoon UTC
NOW = datetime(2026, 10, 19, 15, 30)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def tables() -> Generator[None, None, None]:
    """Fresh schema for each test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(tables) -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client with the database dependency pointed at the test session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture
def sample_snapshot() -> Snapshot:
    """A small CRM with activity in October and September 2026"""
    return Snapshot.model_validate(
        {
            "leads": [
                {"id": 1, "country": "US", "status": "Contacted", "createdAt": "2026-10-19T09:00:00Z"},
                {"id": 2, "country": "US", "status": "Closed Won", "createdAt": "2026-10-19T11:15:00Z"},
                {"id": 3, "country": "FR", "status": "Converted", "createdAt": "2026-10-17T08:00:00Z"},
                {"id": 4, "country": "DE", "status": "New", "createdAt": "2026-10-02T08:00:00Z"},
                {"id": 5, "country": "US", "status": "Contacted", "createdAt": "2026-09-20T08:00:00Z"},
                {"id": 6, "country": "FR", "status": "Qualified", "createdAt": "not a date"},
            ],
            "clients": [
                {
                    "id": 1,
                    "onboardedAt": "2026-10-05T10:00:00Z",
                    "services": [
                        {"type": "SEO", "status": "Active", "startDate": "2026-10-05T10:00:00Z"},
                        {"type": "PPC", "status": "Paused", "startDate": "2026-10-06T10:00:00Z"},
                    ],
                },
                {
                    "id": 2,
                    "onboardedAt": "2026-09-12T10:00:00Z",
                    "services": [
                        {"type": "SEO", "status": "Active", "startDate": "2026-09-12T10:00:00Z"},
                    ],
                },
            ],
            "payments": [
                {"id": 1, "amount": 300, "status": "Paid", "date": "2026-10-03T00:00:00Z"},
                {"id": 2, "amount": 200, "status": "Paid", "date": "2026-10-10T00:00:00Z"},
                {"id": 3, "amount": 999, "status": "Due", "date": "2026-10-11T00:00:00Z"},
                {"id": 4, "amount": 400, "status": "Paid", "date": "2026-09-15T00:00:00Z"},
            ],
            "campaigns": [
                {"id": 1, "sentCount": 100, "openCount": 40, "clickCount": 10, "createdAt": "2026-10-15T00:00:00Z"},
                {"id": 2, "sentCount": 0, "openCount": 0, "clickCount": 0, "createdAt": "2026-10-16T00:00:00Z"},
            ],
        }
    )
