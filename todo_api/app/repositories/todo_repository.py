"""
SQLite storage for todo items.

One method per canonical query shape used by the search dispatcher,
plus single-record access by id.  Each page query returns the
requested window together with the total number of matching rows.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, Optional

from todo_api.app.core.db import SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER, get_cursor
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import TodoDraft, TodoPage, TodoRead
from .paging import order_and_limit


_COLUMNS = "id, name, priority, description, completed, owner_name"
_SORTABLE = ("id", "name", "priority", "completed")


def _row_to_todo(row: sqlite3.Row) -> TodoRead:
    return TodoRead(
        id=row["id"],
        name=row["name"],
        priority=row["priority"],
        description=row["description"],
        completed=bool(row["completed"]),
        owner_name=row["owner_name"],
    )


def _storable_id(todo_id: int) -> bool:
    return SQLITE_MIN_INTEGER <= todo_id <= SQLITE_MAX_INTEGER


class TodoRepository:
    """Storage collaborator for ``TodoRead`` records."""

    # ------------------------------------------------------------------
    # Page queries
    # ------------------------------------------------------------------
    def find_by_name_and_priority_and_owner(
        self, name: str, priority: str, owner: str, window: PageWindow
    ) -> TodoPage:
        return self._find({"name": name, "priority": priority, "owner_name": owner}, window)

    def find_by_name_and_priority(self, name: str, priority: str, window: PageWindow) -> TodoPage:
        return self._find({"name": name, "priority": priority}, window)

    def find_by_name_and_owner(self, name: str, owner: str, window: PageWindow) -> TodoPage:
        return self._find({"name": name, "owner_name": owner}, window)

    def find_by_name(self, name: str, window: PageWindow) -> TodoPage:
        return self._find({"name": name}, window)

    def find_by_priority_and_owner(self, priority: str, owner: str, window: PageWindow) -> TodoPage:
        return self._find({"priority": priority, "owner_name": owner}, window)

    def find_by_priority(self, priority: str, window: PageWindow) -> TodoPage:
        return self._find({"priority": priority}, window)

    def find_by_owner(self, owner: str, window: PageWindow) -> TodoPage:
        return self._find({"owner_name": owner}, window)

    def find_all(self, window: PageWindow) -> TodoPage:
        return self._find({}, window)

    def _find(self, where: Dict[str, Any], window: PageWindow) -> TodoPage:
        # Column names come from the methods above, never from callers.
        where_sql = ""
        params: list = list(where.values())
        if where:
            where_sql = " WHERE " + " AND ".join(f"{column} = ?" for column in where)
        suffix, page_params = order_and_limit(window, _SORTABLE, "id")
        with get_cursor() as cursor:
            total = cursor.execute(
                f"SELECT COUNT(*) AS count FROM todos{where_sql}", tuple(params)
            ).fetchone()["count"]
            rows = cursor.execute(
                f"SELECT {_COLUMNS} FROM todos{where_sql}{suffix}",
                tuple(params + page_params),
            ).fetchall()
        return TodoPage(
            items=[_row_to_todo(row) for row in rows],
            total=total,
            limit=window.limit,
            offset=window.offset,
        )

    # ------------------------------------------------------------------
    # Single records
    # ------------------------------------------------------------------
    def get(self, todo_id: int) -> Optional[TodoRead]:
        if not _storable_id(todo_id):
            # No row can carry an id SQLite cannot represent.
            return None
        with get_cursor() as cursor:
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM todos WHERE id = ?", (todo_id,)
            ).fetchone()
        return _row_to_todo(row) if row else None

    def insert(self, draft: TodoDraft, owner_name: str) -> TodoRead:
        """Store a new item and return it with its assigned id."""
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO todos (name, priority, description, completed, owner_name) "
                "VALUES (?, ?, ?, ?, ?)",
                (draft.name, draft.priority, draft.description, int(draft.completed), owner_name),
            )
            todo_id = cursor.lastrowid
        return TodoRead(id=todo_id, owner_name=owner_name, **draft.model_dump())

    def replace(self, todo_id: int, draft: TodoDraft, owner_name: str) -> TodoRead:
        """Overwrite every client-controlled field of an existing item in one statement."""
        with get_cursor() as cursor:
            cursor.execute(
                "UPDATE todos SET name = ?, priority = ?, description = ?, completed = ?, "
                "owner_name = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (draft.name, draft.priority, draft.description, int(draft.completed), owner_name, todo_id),
            )
        return TodoRead(id=todo_id, owner_name=owner_name, **draft.model_dump())

    def delete(self, todo_id: int) -> None:
        if not _storable_id(todo_id):
            return
        with get_cursor() as cursor:
            cursor.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
