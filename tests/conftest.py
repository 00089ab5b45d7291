"""Root conftest for all tests.

Every test gets its own in-memory SQLite database. The application's lazy
engine in fitfeed.db.session is replaced with it, so both direct service
calls (db_session) and HTTP calls through the app (client) hit the same
isolated schema.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fitfeed.db.models import Base, User, WorkoutSession
from fitfeed.db.session import get_session


# Enable foreign key constraints for SQLite
@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints in SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def engine(monkeypatch):
    """In-memory SQLite engine wired into fitfeed.db.session."""
    test_engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(test_engine)

    import fitfeed.db.session as session_module

    monkeypatch.setattr(session_module, "_engine", test_engine)
    monkeypatch.setattr(session_module, "_SessionLocal", None)

    yield test_engine

    test_engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """
    Provides a SQLAlchemy session on the per-test database.

    Usage:
        def test_something(db_session):
            db_session.add(User(...))
            db_session.commit()
    """
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(engine):
    """TestClient running the app lifespan (tables plus seeded exercise catalog)."""
    from fitfeed.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db_session):
    """Factory for users with zeroed counters."""
    counter = {"n": 0}

    def _make_user(name: str = "Test Athlete", email: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"athlete{counter['n']}@example.com",
            password_hash="not-a-real-hash",
            name=name,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def register(client):
    """Register a user through the API and return (token, user payload)."""

    def _register(email: str = "alex@example.com", password: str = "secret123", name: str = "Alex"):
        response = client.post("/auth/register", json={"email": email, "password": password, "name": name})
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], body["user"]

    return _register


@pytest.fixture
def backdate(engine):
    """Move a workout's start time into the past so its finish has a real duration."""

    def _backdate(session_id: str, minutes: int) -> None:
        with get_session() as session:
            workout = session.get(WorkoutSession, session_id)
            workout.started_at = workout.started_at - timedelta(minutes=minutes)

    return _backdate
