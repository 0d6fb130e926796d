from datetime import UTC, date, datetime
from pathlib import Path

import pytest

from src.adapters.clock import FixedClock
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.domain.entities import Role, User
from src.rules.loader import load_rules

ROOT = Path(__file__).resolve().parent.parent

TODAY = date(2024, 6, 15)


@pytest.fixture
def rules():
    return load_rules(ROOT / "rules.yaml")


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 6, 15, 12, 0, tzinfo=UTC))


@pytest.fixture
def db_path(tmp_path):
    """A migrated, empty database."""
    path = str(tmp_path / "cms.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def user_repo(db_path):
    return SQLiteUserRepo(db_path)


@pytest.fixture
def admin(user_repo):
    return user_repo.create(
        User(id=0, email="admin@example.com", username="admin", role=Role.ADMIN, password_hash="x")
    )


@pytest.fixture
def alice(user_repo):
    return user_repo.create(
        User(id=0, email="alice@example.com", username="alice", password_hash="x")
    )


@pytest.fixture
def bob(user_repo):
    return user_repo.create(User(id=0, email="bob@example.com", username="bob", password_hash="x"))
