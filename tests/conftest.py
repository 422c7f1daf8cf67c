"""
Shared fixtures: an in-memory SQLite metadata store and an in-memory
object store, injected into the app through create_app.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core.database import init_db
from app.main import create_app


class FakeObjectStore:
    """Records every stored object; raises fail_with instead when it is set."""

    def __init__(self, bucket="fake-bucket"):
        self.bucket = bucket
        self.objects = {}
        self.fail_with = None

    def store(self, data, key, content_type=None):
        if self.fail_with is not None:
            raise self.fail_with
        self.objects[key] = (data, content_type)
        return f"https://{self.bucket}.local/{key}"


@pytest.fixture
def session_factory():
    engine, SessionLocal = init_db(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield SessionLocal
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def client(session_factory, object_store):
    app = create_app(session_factory=session_factory, object_store=object_store)
    with TestClient(app) as test_client:
        yield test_client
