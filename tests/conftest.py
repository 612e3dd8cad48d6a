"""Shared test configuration: in-memory database, temporary upload store, tokens."""

import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.api.deps import get_blob_store, get_db
from app.core.config import settings
from app.core.database import Base, json_serializer
from app.main import app
from app.services.storage import BlobStore

from tests.helpers import bearer


def _make_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def _serve(session_factory, blob_store):
    """Point the app's session and blob store dependencies at the test ones."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    return TestClient(app)


@pytest.fixture()
def engine():
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


@pytest.fixture()
def file_engine(tmp_path):
    """File-backed database with a real connection pool, for concurrent requests."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'church.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
        json_serializer=json_serializer,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return _make_session_factory(engine)


@pytest.fixture()
def file_session_factory(file_engine):
    return _make_session_factory(file_engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def blob_store(tmp_path):
    store = BlobStore(tmp_path / "uploads", url_prefix="/uploads", max_size=settings.MAX_UPLOAD_SIZE)
    store.ensure_root()
    return store


@pytest.fixture()
def client(session_factory, blob_store):
    yield _serve(session_factory, blob_store)
    app.dependency_overrides.clear()


@pytest.fixture()
def threaded_client(file_session_factory, blob_store):
    yield _serve(file_session_factory, blob_store)
    app.dependency_overrides.clear()


@pytest.fixture()
def user_headers():
    return bearer(sub="user-1", email="user@church.org", role="member")


@pytest.fixture()
def other_headers():
    return bearer(sub="user-2", email="other@church.org", role="member")


@pytest.fixture()
def admin_headers():
    return bearer(sub="admin-1", email="admin@church.org", role="admin")
