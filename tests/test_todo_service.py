from unittest.mock import MagicMock

import pytest

from todo_api.app.core.errors import Forbidden, NotFound, Unauthenticated
from todo_api.app.repositories.todo_repository import TodoRepository
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import TodoDraft
from todo_api.app.services.todo_service import TodoService

WINDOW = PageWindow(limit=50, offset=0)


@pytest.fixture
def service(todo_repository):
    return TodoService(todo_repository)


@pytest.mark.asyncio
async def test_create_then_get_assigns_id_and_owner(service, alice):
    draft = TodoDraft.model_validate(
        {"id": 77, "name": "write tests", "priority": "high", "description": "all of them",
         "completed": True, "owner_name": "mallory"}
    )

    todo_id = await service.create(alice, draft)
    stored = await service.get(alice, todo_id)

    assert stored.id == todo_id
    assert stored.owner_name == "alice"
    assert stored.model_dump(exclude={"id", "owner_name"}) == draft.model_dump()


@pytest.mark.asyncio
async def test_get_other_users_item_is_forbidden(service, alice, bob):
    todo_id = await service.create(alice, TodoDraft(name="private"))
    with pytest.raises(Forbidden) as exc:
        await service.get(bob, todo_id)
    assert "bob" in exc.value.detail
    assert str(todo_id) in exc.value.detail


@pytest.mark.asyncio
async def test_admin_can_get_any_item(service, alice, admin):
    todo_id = await service.create(alice, TodoDraft(name="private"))
    assert (await service.get(admin, todo_id)).owner_name == "alice"


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["get", "delete"])
async def test_missing_item_is_not_found_even_for_non_admin(service, bob, operation):
    with pytest.raises(NotFound):
        await getattr(service, operation)(bob, 12345)


@pytest.mark.asyncio
async def test_update_keeps_stored_owner(service, todo_repository, alice, admin):
    todo_id = await service.create(alice, TodoDraft(name="old", priority="low"))
    draft = TodoDraft.model_validate({"name": "new", "priority": "high", "owner_name": "root"})

    await service.update(admin, todo_id, draft)

    stored = todo_repository.get(todo_id)
    assert stored.owner_name == "alice"
    assert stored.name == "new"
    assert stored.priority == "high"


@pytest.mark.asyncio
async def test_owner_can_update_own_item(service, todo_repository, alice):
    todo_id = await service.create(alice, TodoDraft(name="old"))
    await service.update(alice, todo_id, TodoDraft(name="done", completed=True))
    stored = todo_repository.get(todo_id)
    assert stored.completed is True
    assert stored.owner_name == "alice"


@pytest.mark.asyncio
async def test_update_of_missing_id_creates_new_item(service, todo_repository, bob):
    await service.update(bob, 999, TodoDraft(name="created by update"))

    assert todo_repository.get(999) is None
    page = todo_repository.find_by_owner("bob", WINDOW)
    assert page.total == 1
    created = page.items[0]
    assert created.id != 999
    assert created.name == "created by update"
    assert created.owner_name == "bob"


@pytest.mark.asyncio
async def test_update_other_users_item_is_forbidden(service, todo_repository, alice, bob):
    todo_id = await service.create(alice, TodoDraft(name="mine"))
    with pytest.raises(Forbidden):
        await service.update(bob, todo_id, TodoDraft(name="hijacked"))
    assert todo_repository.get(todo_id).name == "mine"


@pytest.mark.asyncio
async def test_delete(service, todo_repository, alice, bob, admin):
    first = await service.create(alice, TodoDraft(name="one"))
    second = await service.create(alice, TodoDraft(name="two"))

    with pytest.raises(Forbidden):
        await service.delete(bob, first)
    assert todo_repository.get(first) is not None

    await service.delete(alice, first)
    await service.delete(admin, second)
    assert todo_repository.get(first) is None
    assert todo_repository.get(second) is None


@pytest.mark.asyncio
async def test_list_all_is_scoped_by_role(service, alice, bob, admin):
    await service.create(alice, TodoDraft(name="a1"))
    await service.create(alice, TodoDraft(name="a2"))
    await service.create(bob, TodoDraft(name="b1"))

    alice_page = await service.list_all(alice, WINDOW)
    admin_page = await service.list_all(admin, WINDOW)

    assert alice_page.total == 2
    assert {t.owner_name for t in alice_page.items} == {"alice"}
    assert admin_page.total == 3


@pytest.mark.asyncio
async def test_operations_require_identity_before_storage_access():
    repo = MagicMock(spec=TodoRepository)
    service = TodoService(repo)
    draft = TodoDraft(name="x")

    with pytest.raises(Unauthenticated):
        await service.list_all(None, WINDOW)
    with pytest.raises(Unauthenticated):
        await service.create(None, draft)
    with pytest.raises(Unauthenticated):
        await service.get(None, 1)
    with pytest.raises(Unauthenticated):
        await service.update(None, 1, draft)
    with pytest.raises(Unauthenticated):
        await service.delete(None, 1)
    assert repo.method_calls == []
