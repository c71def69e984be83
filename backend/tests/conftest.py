import pytest
from fastapi.testclient import TestClient
from sqlmodel import create_engine
from sqlmodel.pool import StaticPool

from passlab.database import CredentialStore
from passlab.main import create_app


@pytest.fixture(autouse=True)
def _cheap_bcrypt(monkeypatch):
    """Lowest bcrypt cost so the suite stays fast."""
    monkeypatch.setattr("passlab.config.settings.bcrypt_rounds", 4)


@pytest.fixture(name="store")
def store_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    store = CredentialStore(engine=engine)
    store.init_schema()
    yield store
    store.dispose()


@pytest.fixture(name="client")
def client_fixture(store: CredentialStore):
    with TestClient(create_app(store)) as client:
        yield client


@pytest.fixture
def alice(client: TestClient) -> dict:
    response = client.post(
        "/api/signup",
        json={"username": "alice", "password": "correct-horse"},
    )
    return response.json()["user"]
