import pytest
from fastapi.testclient import TestClient

from src.adapters.auth.session_store import InMemorySessionStore
from src.adapters.sqlite.repos import SQLiteImageRepo, SQLiteUserRepo
from src.api.auth_utils import get_password_hash
from src.api.deps import Settings, get_clock, get_session_store, get_settings
from src.api.main import app
from src.domain.entities import Role, User

PASSWORD = "password"


@pytest.fixture
def override_settings(db_path, clock):
    def _settings():
        s = Settings()
        s.db_path = db_path
        return s

    store = InMemorySessionStore()
    app.dependency_overrides[get_settings] = _settings
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_session_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_settings):
    return TestClient(app)


@pytest.fixture
def accounts(db_path):
    """Two regular authors and an administrator, all with the same password."""
    repo = SQLiteUserRepo(db_path)
    hashed = get_password_hash(PASSWORD)
    return {
        name: repo.create(
            User(
                id=0,
                email=f"{name}@example.com",
                username=name,
                name=name.title(),
                role=Role.ADMIN if name == "admin" else Role.REGULAR,
                password_hash=hashed,
            )
        )
        for name in ("alice", "bob", "admin")
    }


@pytest.fixture
def image(db_path):
    return SQLiteImageRepo(db_path).create("/img/cat.png", alt="A cat", title="Cat")


@pytest.fixture
def login(client, accounts):
    """Log `client` in as one of the accounts; the session cookie sticks to the client."""

    def _login(name):
        response = client.post(
            "/api/session", json={"username": f"{name}@example.com", "password": PASSWORD}
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login
