"""
Dependency providers shared by the endpoint modules.

Services are built per request from fresh repositories; they hold no
state between requests.
"""

from typing import Optional

from fastapi import Query

from todo_api.app.core.config import settings
from todo_api.app.core.db import SQLITE_MAX_INTEGER
from todo_api.app.repositories.account_repository import AccountRepository
from todo_api.app.repositories.todo_repository import TodoRepository
from todo_api.app.schemas.page import PageWindow
from todo_api.app.services.todo_query_dispatcher import TodoQueryDispatcher
from todo_api.app.services.todo_service import TodoService
from todo_api.app.services.user_service import UserService


def get_page_window(
    limit: Optional[int] = Query(None, ge=1, le=settings.max_page_size, description="Page size"),
    offset: int = Query(0, ge=0, le=SQLITE_MAX_INTEGER, description="Number of records to skip"),
    sort_by: Optional[str] = Query(None, description="Sort column; unknown values sort by primary key"),
    order: str = Query("asc", description="Sort direction: asc or desc"),
) -> PageWindow:
    return PageWindow(
        limit=limit or settings.default_page_size,
        offset=offset,
        sort_by=sort_by,
        order=order,
    )


def get_todo_query_dispatcher() -> TodoQueryDispatcher:
    return TodoQueryDispatcher(TodoRepository())


def get_todo_service() -> TodoService:
    return TodoService(TodoRepository())


def get_user_service() -> UserService:
    return UserService(
        AccountRepository(),
        password_length=settings.generated_password_length,
        password_charset=settings.generated_password_charset,
    )
