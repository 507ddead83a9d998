from todo_api.app.core.config import settings
from todo_api.app.core.db import get_cursor, init_db
from todo_api.app.core.security import verify_password
from todo_api.app.repositories.account_repository import AccountRepository
from todo_api.app.schemas.identity import Role
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import TodoDraft

from tests.conftest import add_account


def _seed(repo):
    for name, priority, owner in [
        ("c", "low", "alice"),
        ("a", "high", "alice"),
        ("b", "low", "bob"),
        ("a", "low", "bob"),
    ]:
        repo.insert(TodoDraft(name=name, priority=priority), owner_name=owner)


def test_page_window_limits_and_counts(todo_repository):
    _seed(todo_repository)
    page = todo_repository.find_all(PageWindow(limit=3, offset=0))
    assert page.total == 4
    assert [t.id for t in page.items] == [1, 2, 3]

    page = todo_repository.find_all(PageWindow(limit=3, offset=3))
    assert page.total == 4
    assert [t.id for t in page.items] == [4]
    assert (page.limit, page.offset) == (3, 3)


def test_sorting_and_fallback(todo_repository):
    _seed(todo_repository)
    by_name = todo_repository.find_all(PageWindow(limit=10, sort_by="name", order="desc"))
    assert [t.name for t in by_name.items] == ["c", "b", "a", "a"]
    # ties on name are ordered by id
    assert [t.id for t in by_name.items][2:] == [2, 4]

    unknown = todo_repository.find_all(PageWindow(limit=10, sort_by="owner_name; DROP TABLE todos", order="sideways"))
    assert [t.id for t in unknown.items] == [1, 2, 3, 4]


def test_query_shapes_filter_exactly(todo_repository):
    _seed(todo_repository)
    w = PageWindow(limit=10)
    assert todo_repository.find_by_name("a", w).total == 2
    assert todo_repository.find_by_priority("low", w).total == 3
    assert todo_repository.find_by_owner("bob", w).total == 2
    assert todo_repository.find_by_name_and_owner("a", "bob", w).total == 1
    assert todo_repository.find_by_priority_and_owner("low", "alice", w).total == 1
    assert todo_repository.find_by_name_and_priority("a", "high", w).total == 1
    assert todo_repository.find_by_name_and_priority_and_owner("a", "high", "bob", w).total == 0


def test_replace_and_delete(todo_repository):
    created = todo_repository.insert(TodoDraft(name="x", description="d"), owner_name="alice")
    todo_repository.replace(created.id, TodoDraft(name="y", completed=True), owner_name="alice")
    stored = todo_repository.get(created.id)
    assert stored.name == "y"
    assert stored.description is None
    assert stored.completed is True

    todo_repository.delete(created.id)
    assert todo_repository.get(created.id) is None


def test_ids_outside_integer_range_match_nothing(todo_repository):
    created = todo_repository.insert(TodoDraft(name="x"), owner_name="alice")
    for todo_id in (2 ** 63, -(2 ** 63) - 1, 10 ** 20):
        assert todo_repository.get(todo_id) is None
        todo_repository.delete(todo_id)
    assert todo_repository.get(created.id) is not None


def test_account_repository(account_repository):
    add_account("zed")
    add_account("amy", Role.ADMIN)
    assert account_repository.exists("zed")
    assert not account_repository.exists("nobody")

    page = account_repository.find_all(PageWindow(limit=1, offset=0))
    assert page.total == 2
    assert [a.login for a in page.items] == ["amy"]

    page = account_repository.find_all(PageWindow(limit=10, sort_by="role", order="asc"))
    assert [a.login for a in page.items] == ["amy", "zed"]

    account_repository.update_password("zed", "new-hash")
    assert account_repository.get("zed").password_hash == "new-hash"
    assert account_repository.delete("zed") is True
    assert account_repository.delete("zed") is False


def test_init_db_is_idempotent_and_seeds_admin(monkeypatch):
    monkeypatch.setattr(settings, "bootstrap_admin_login", "boss")
    monkeypatch.setattr(settings, "bootstrap_admin_password", "changeme")
    init_db()
    init_db()

    account = AccountRepository().get("boss")
    assert account.role == Role.ADMIN
    assert verify_password("changeme", account.password_hash)
    with get_cursor() as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations ORDER BY version")]
    assert versions == [1, 2]


def test_bootstrap_admin_skipped_when_accounts_exist(monkeypatch):
    add_account("alice")
    monkeypatch.setattr(settings, "bootstrap_admin_login", "boss")
    monkeypatch.setattr(settings, "bootstrap_admin_password", "changeme")
    init_db()
    assert AccountRepository().get("boss") is None
