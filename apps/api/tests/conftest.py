import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from izin_api.core.security import create_access_token
from izin_api.db import get_session, get_session_factory
from izin_api.main import app
from izin_api.models.user import Base, User
from izin_api.services.permit_workflow import submit_permit
import izin_api.models.permit  # noqa: F401
import izin_api.models.notification_log  # noqa: F401

from factories import PASSWORD_HASH, permit_payload


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def users(session):
    """Karyawan 001, HR 002 and Admin 003, keyed by role."""
    rows = [
        User(nik="001", password=PASSWORD_HASH, name="Ahmad Pratama", role="Karyawan"),
        User(nik="002", password=PASSWORD_HASH, name="Siti Rahayu", role="HR"),
        User(nik="003", password=PASSWORD_HASH, name="Budi Santoso", role="Admin"),
    ]
    session.add_all(rows)
    session.commit()
    return {u.role: u for u in rows}


@pytest.fixture
def auth_headers(users):
    tokens = {role: create_access_token(u.id, u.nik, u.role) for role, u in users.items()}

    def _headers(role: str) -> dict:
        return {"Authorization": f"Bearer {tokens[role]}"}

    return _headers


@pytest.fixture
def client(session_factory):
    def _get_session():
        with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_permit(session):
    def _make(**overrides):
        return submit_permit(session, permit_payload(**overrides))

    return _make
