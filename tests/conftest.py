"""Shared fixtures: an isolated SQLite database and API client per test."""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "UTC")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from notification_center.infrastructure.database import (  # noqa: E402
    build_engine,
    get_db,
    initialize_database,
)
from notification_center.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture()
def engine(tmp_path):
    """Return an engine bound to a fresh SQLite file."""

    test_engine = build_engine(f"sqlite:///{tmp_path / 'notifications.db'}")
    initialize_database(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    """Return a test client whose requests use the per-test database."""

    from notification_center.main import create_app

    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build ``Authorization`` headers for an arbitrary user."""

    def _build(user_id: str, *, role: str = "member") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id, role=role)}"}

    return _build
