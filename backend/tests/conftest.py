"""Pytest fixtures — a fresh SQLite file database per test."""
import os

# Keep the module-level engine off Postgres while the app is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from helpdesk.database import Base, get_db, make_engine
from helpdesk.main import app

# Import all models so they register with Base.metadata
from helpdesk.models.profile import Profile, Role            # noqa: F401
from helpdesk.models.auth_session import AuthSession         # noqa: F401
from helpdesk.models.request import TicketRequest            # noqa: F401
from helpdesk.services import profile_service

PASSWORD = "secret-pass"


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create a fresh SQLite engine for each test."""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session for service-level tests."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def make_profile(db, email: str, role: Role = Role.user, service: str = "IT") -> Profile:
    """Sign up through the service and, for staff, promote directly in the DB."""
    profile = profile_service.sign_up(db, email, PASSWORD, service)
    if role != Role.user:
        profile.role = role
        db.commit()
        db.refresh(profile)
    return profile


def request_fields(**overrides) -> dict:
    fields = {
        "type": "incident",
        "category": "Problème d'imprimante",
        "title": "Printer jam",
        "description": "Paper stuck in tray 2",
        "location": "Floor 2",
        "priority": "moyenne",
        "service_demandeur": "IT",
    }
    fields.update(overrides)
    return fields


def signup_and_signin(client: TestClient, session_factory, email: str,
                      role: Role = Role.user, service: str = "IT") -> tuple[dict, dict]:
    """Create an account over HTTP, optionally promote it, and return (profile, auth headers)."""
    resp = client.post("/api/auth/signup", json={
        "email": email,
        "password": PASSWORD,
        "service": service,
    })
    assert resp.status_code == 201, resp.text
    profile = resp.json()

    if role != Role.user:
        with session_factory() as s:
            s.get(Profile, profile["profile_id"]).role = role
            s.commit()

    resp = client.post("/api/auth/signin", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return body["profile"], {"Authorization": f"Bearer {body['access_token']}"}
