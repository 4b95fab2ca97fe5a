"""Shared pytest fixtures: in-memory SQLite, API client, users."""
import os
import tempfile

# Настройки должны быть заданы до импорта приложения
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ATTACHMENTS_DIR", tempfile.mkdtemp(prefix="crm-attachments-"))

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, SessionLocal, engine, get_db
from app.main import app
from app.models.user import UserRole
from tests.factories import ClientFactory, UserFactory, auth_headers

FACTORIES = (UserFactory, ClientFactory)


@pytest.fixture
def db():
    """Fresh schema and session for every test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    for factory_cls in FACTORIES:
        factory_cls._meta.sqlalchemy_session = session
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """API client sharing the test session."""
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def manager(db):
    return UserFactory(role=UserRole.MANAGER.value, name="Charlie Manager")


@pytest.fixture
def agent(db):
    return UserFactory(role=UserRole.AGENT.value, name="Alice Agent")


@pytest.fixture
def other_agent(db):
    return UserFactory(role=UserRole.AGENT.value, name="Bob Agent")


@pytest.fixture
def manager_headers(manager):
    return auth_headers(manager)


@pytest.fixture
def agent_headers(agent):
    return auth_headers(agent)
