import pytest
from fastapi.testclient import TestClient
from sqlmodel import create_engine
from sqlmodel.pool import StaticPool

from userbase.config import Settings
from userbase.main import create_app
from userbase.migrations import apply_schema
from userbase.repository import UserRepository


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(name="bare_engine")
def bare_engine_fixture():
    """An empty store that has never been migrated."""
    engine = _memory_engine()
    yield engine
    engine.dispose()


@pytest.fixture(name="engine")
def engine_fixture():
    engine = _memory_engine()
    apply_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="repository")
def repository_fixture(engine) -> UserRepository:
    return UserRepository(engine)


@pytest.fixture(name="client")
def client_fixture(engine):
    app = create_app(settings=Settings(auto_migrate=False), engine=engine)
    client = TestClient(app)
    yield client


@pytest.fixture
def alice(client: TestClient) -> dict:
    response = client.post("/users", json={"username": "alice", "password": "p1"})
    return response.json()
