"""
Todo endpoints for API v1.

CRUD over single todo items plus the unfiltered listing.  Every route
requires a bearer token; ownership rules live in ``TodoService``.
"""

from fastapi import APIRouter, Depends, Response, status

from todo_api.app.api.deps import get_page_window, get_todo_service
from todo_api.app.core.security import get_current_identity
from todo_api.app.schemas.identity import Identity
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import TodoCreated, TodoDraft, TodoPage, TodoRead
from todo_api.app.services.todo_service import TodoService


router = APIRouter()


@router.get("/", response_model=TodoPage)
async def list_todos(
    window: PageWindow = Depends(get_page_window),
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> TodoPage:
    """List todo items.

    Administrators see every item, other users only their own.
    """
    return await service.list_all(identity, window)


@router.post("/", response_model=TodoCreated, status_code=status.HTTP_201_CREATED)
async def create_todo(
    draft: TodoDraft,
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> TodoCreated:
    """Create a todo item owned by the caller and return its id."""
    return TodoCreated(id=await service.create(identity, draft))


@router.get("/{todo_id}", response_model=TodoRead)
async def get_todo(
    todo_id: int,
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> TodoRead:
    return await service.get(identity, todo_id)


@router.put("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_todo(
    todo_id: int,
    draft: TodoDraft,
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> None:
    """Replace a todo item.

    If no item with ``todo_id`` exists a new one is created under a
    fresh id.  The owner of an existing item never changes.
    """
    await service.update(identity, todo_id, draft)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_todo(
    todo_id: int,
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> None:
    await service.delete(identity, todo_id)
