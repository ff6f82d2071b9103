"""Pytest fixtures: in-memory database, API client and account helpers."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.database import get_db, json_serializer  # noqa: E402
from app.models import Base  # noqa: E402
from main import app  # noqa: E402


API = "/api"

DEFAULT_PROMPT = {
    "title": "T",
    "content": "C",
    "category": "ビジネス",
    "purpose": "要約",
}


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory SQLite schema for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        json_serializer=json_serializer,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager, so the startup database wait does not run
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(token: str) -> dict:
    return {"x-auth-token": token}


def register(client: TestClient, username: str, email: str | None = None, password: str = "secret1") -> str:
    response = client.post(
        f"{API}/auth/register",
        json={"username": username, "email": email or f"{username}@example.com", "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


def me(client: TestClient, token: str) -> dict:
    response = client.get(f"{API}/auth/me", headers=auth(token))
    assert response.status_code == 200, response.text
    return response.json()


def create_prompt(client: TestClient, token: str, **overrides) -> dict:
    response = client.post(f"{API}/prompts", json={**DEFAULT_PROMPT, **overrides}, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def alice(client):
    return register(client, "alice")


@pytest.fixture
def bob(client):
    return register(client, "bob")
