"""Pytest fixtures — file-backed SQLite database, fresh for each test."""
from datetime import datetime, timedelta

import pytest
import pytz
from jose import jwt
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.config import settings
from app.database import Base, get_db
from app.main import app

# Import all models so they register with Base.metadata
from app.models.user import User, UserRole          # noqa: F401
from app.models.event import Event                  # noqa: F401
from app.models.announcement import Announcement    # noqa: F401

SQLITE_URL = "sqlite:///./test.db"

# A venue on campus and a point ~15m away from it.
VENUE = (33.4242, -111.9281)
NEARBY = (33.4243, -111.9282)
FAR_AWAY = (33.4500, -111.9281)


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(db):
    """Seed an e-board user and return its auth headers."""
    db.add(User(user_id="admin-1", email="admin@chapter.org", name="Admin", role=UserRole.e_board))
    db.commit()
    return auth_headers("admin-1", "admin@chapter.org")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def make_token(user_id: str, email: str, secret: str = None, audience: str = None) -> str:
    """Mint an access token shaped like the identity provider's."""
    payload = {
        "sub": user_id,
        "email": email,
        "aud": audience or settings.JWT_AUDIENCE,
        "exp": 9999999999,
        "role": "authenticated",
    }
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def auth_headers(user_id: str, email: str = None) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, email or f'{user_id}@asu.edu')}"}


def local_now() -> datetime:
    return datetime.now(pytz.timezone(settings.EVENT_TIMEZONE))


def event_payload(name: str = "General Meeting", start: datetime = None, hours: float = 2.0, **extra) -> dict:
    """Event body starting at ``start`` (default: 30 minutes ago, so it is in session)."""
    start = start or local_now() - timedelta(minutes=30)
    payload = {
        "event_name": name,
        "event_description": "Monthly chapter meeting",
        "event_location": "Memorial Union 230",
        "event_lat": VENUE[0],
        "event_long": VENUE[1],
        "event_date": start.date().isoformat(),
        "event_time": start.strftime("%H:%M:%S"),
        "event_hours": hours,
    }
    payload.update(extra)
    return payload


def create_test_event(client: TestClient, admin_headers: dict, **kwargs) -> dict:
    """Helper — POST /events as an admin and return response JSON."""
    resp = client.post("/events", json=event_payload(**kwargs), headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()
