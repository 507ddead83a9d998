from unittest.mock import MagicMock

import pytest

from todo_api.app.core.errors import Unauthenticated
from todo_api.app.repositories.todo_repository import TodoRepository
from todo_api.app.schemas.identity import Identity, Role
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import SearchFilters, TodoDraft
from todo_api.app.services.ownership_policy import Scope
from todo_api.app.services.todo_query_dispatcher import TodoQueryDispatcher

WINDOW = PageWindow(limit=10, offset=0)
OWNED = Scope.owned_by("alice")
ALL = Scope.all()

FIND_METHODS = [
    "find_by_name_and_priority_and_owner",
    "find_by_name_and_priority",
    "find_by_name_and_owner",
    "find_by_name",
    "find_by_priority_and_owner",
    "find_by_priority",
    "find_by_owner",
    "find_all",
]


def _assert_only_called(repo, method, *args):
    getattr(repo, method).assert_called_once_with(*args)
    for other in FIND_METHODS:
        if other != method:
            getattr(repo, other).assert_not_called()


@pytest.mark.parametrize(
    "name, priority, scope, method, args",
    [
        ("alpha", "high", OWNED, "find_by_name_and_priority_and_owner", ("alpha", "high", "alice")),
        ("alpha", "high", ALL, "find_by_name_and_priority", ("alpha", "high")),
        ("alpha", None, OWNED, "find_by_name_and_owner", ("alpha", "alice")),
        ("alpha", None, ALL, "find_by_name", ("alpha",)),
        (None, "high", OWNED, "find_by_priority_and_owner", ("high", "alice")),
        (None, "high", ALL, "find_by_priority", ("high",)),
        (None, None, OWNED, "find_by_owner", ("alice",)),
        (None, None, ALL, "find_all", ()),
    ],
)
def test_find_selects_query_shape(name, priority, scope, method, args):
    repo = MagicMock(spec=TodoRepository)
    dispatcher = TodoQueryDispatcher(repo)

    result = dispatcher.find(SearchFilters(name=name, priority=priority), scope, WINDOW)

    _assert_only_called(repo, method, *args, WINDOW)
    assert result is getattr(repo, method).return_value


def test_empty_priority_counts_as_absent():
    repo = MagicMock(spec=TodoRepository)
    TodoQueryDispatcher(repo).find(SearchFilters(name="alpha", priority=""), ALL, WINDOW)
    _assert_only_called(repo, "find_by_name", "alpha", WINDOW)


def test_blank_filters_count_as_absent():
    repo = MagicMock(spec=TodoRepository)
    TodoQueryDispatcher(repo).find(SearchFilters(name="   ", priority="\t"), OWNED, WINDOW)
    _assert_only_called(repo, "find_by_owner", "alice", WINDOW)


def test_filters_are_stripped():
    repo = MagicMock(spec=TodoRepository)
    TodoQueryDispatcher(repo).find(SearchFilters(name=" bug ", priority=None), OWNED, WINDOW)
    _assert_only_called(repo, "find_by_name_and_owner", "bug", "alice", WINDOW)


@pytest.mark.asyncio
async def test_search_scopes_regular_users():
    repo = MagicMock(spec=TodoRepository)
    await TodoQueryDispatcher(repo).search(Identity("alice", Role.USER), SearchFilters(priority="low"), WINDOW)
    _assert_only_called(repo, "find_by_priority_and_owner", "low", "alice", WINDOW)


@pytest.mark.asyncio
async def test_search_unscoped_for_admin():
    repo = MagicMock(spec=TodoRepository)
    await TodoQueryDispatcher(repo).search(Identity("root", Role.ADMIN), SearchFilters(priority="low"), WINDOW)
    _assert_only_called(repo, "find_by_priority", "low", WINDOW)


@pytest.mark.asyncio
async def test_search_requires_identity_before_storage():
    repo = MagicMock(spec=TodoRepository)
    with pytest.raises(Unauthenticated):
        await TodoQueryDispatcher(repo).search(None, SearchFilters(name="x"), WINDOW)
    assert repo.method_calls == []


@pytest.mark.asyncio
async def test_search_by_name_returns_only_callers_items(todo_repository):
    todo_repository.insert(TodoDraft(name="bug"), owner_name="alice")
    todo_repository.insert(TodoDraft(name="bug"), owner_name="bob")
    todo_repository.insert(TodoDraft(name="feature"), owner_name="alice")
    dispatcher = TodoQueryDispatcher(todo_repository)

    page = await dispatcher.search(Identity("alice", Role.USER), SearchFilters(name="bug"), WINDOW)

    assert page.total == 1
    assert [(t.name, t.owner_name) for t in page.items] == [("bug", "alice")]

    page = await dispatcher.search(Identity("root", Role.ADMIN), SearchFilters(name="bug"), WINDOW)
    assert page.total == 2
    assert {t.owner_name for t in page.items} == {"alice", "bob"}


@pytest.mark.asyncio
async def test_search_filtered_page_can_be_empty(todo_repository):
    todo_repository.insert(TodoDraft(name="bug", priority="high"), owner_name="bob")
    page = await TodoQueryDispatcher(todo_repository).search(
        Identity("alice", Role.USER), SearchFilters(name="bug", priority="high"), WINDOW
    )
    assert page.items == []
    assert page.total == 0
