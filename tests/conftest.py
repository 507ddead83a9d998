import pytest
from fastapi.testclient import TestClient

from todo_api.app.core.config import settings
from todo_api.app.core.db import init_db
from todo_api.app.core.security import create_access_token, hash_password
from todo_api.app.repositories.account_repository import AccountRecord, AccountRepository
from todo_api.app.repositories.todo_repository import TodoRepository
from todo_api.app.schemas.identity import Identity, Role


@pytest.fixture(autouse=True)
def temp_database(tmp_path, monkeypatch):
    """Point every test at its own freshly migrated SQLite file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "todo_api_test.db"))
    monkeypatch.setattr(settings, "bootstrap_admin_login", "")
    monkeypatch.setattr(settings, "bootstrap_admin_password", "")
    init_db()
    yield


@pytest.fixture
def todo_repository():
    return TodoRepository()


@pytest.fixture
def account_repository():
    return AccountRepository()


@pytest.fixture
def alice():
    return Identity(name="alice", role=Role.USER)


@pytest.fixture
def bob():
    return Identity(name="bob", role=Role.USER)


@pytest.fixture
def admin():
    return Identity(name="root", role=Role.ADMIN)


def fake_hash(password: str) -> str:
    return f"hashed:{password}"


def add_account(login: str, role: Role = Role.USER, password_hash: str = None) -> None:
    AccountRepository().insert(
        AccountRecord(login=login, password_hash=password_hash or fake_hash("secret"), role=role)
    )


@pytest.fixture
def client():
    from todo_api.app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    """Create a real account and return bearer headers for it."""

    def _make(login: str, role: Role = Role.USER, password: str = "secret") -> dict:
        add_account(login, role, password_hash=hash_password(password))
        return {"Authorization": f"Bearer {create_access_token(login)}"}

    return _make
