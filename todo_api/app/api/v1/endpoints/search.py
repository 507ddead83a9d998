"""
Todo search endpoint for API v1.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from todo_api.app.api.deps import get_page_window, get_todo_query_dispatcher
from todo_api.app.core.security import get_current_identity
from todo_api.app.schemas.identity import Identity
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import SearchFilters, TodoPage
from todo_api.app.services.todo_query_dispatcher import TodoQueryDispatcher


router = APIRouter()


@router.get("/", response_model=TodoPage)
async def search_todos(
    name: Optional[str] = Query(None, description="Exact item name; blank means no filter"),
    priority: Optional[str] = Query(None, description="Exact priority; blank means no filter"),
    window: PageWindow = Depends(get_page_window),
    identity: Identity = Depends(get_current_identity),
    dispatcher: TodoQueryDispatcher = Depends(get_todo_query_dispatcher),
) -> TodoPage:
    """Search todo items by name and/or priority.

    - **name**, **priority**: exact-match filters, each optional.
    - **limit**, **offset**, **sort_by**, **order**: paging.

    Non-admin callers only ever get their own items.
    """
    return await dispatcher.search(identity, SearchFilters(name=name, priority=priority), window)
