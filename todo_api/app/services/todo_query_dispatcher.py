"""
Search over todo items.

``TodoQueryDispatcher.find`` turns optional name/priority filters and
an ownership scope into exactly one of the repository's eight query
shapes.  It never filters results itself.  A filter counts as present
only when it is non-empty after stripping whitespace, so blank query
parameters never reach storage as exact-match conditions.

Precedence, first match wins:

1. name and priority, scoped      -> by name, priority and owner
2. name and priority, unscoped    -> by name and priority
3. name only, scoped              -> by name and owner
4. name only, unscoped            -> by name
5. priority only, scoped          -> by priority and owner
6. priority only, unscoped        -> by priority
7. no filter, scoped              -> by owner
8. no filter, unscoped            -> all items
"""

import logging
from typing import Optional

from todo_api.app.repositories.todo_repository import TodoRepository
from todo_api.app.schemas.identity import Identity
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import SearchFilters, TodoPage, TodoRead
from .ownership_policy import Scope, require_authenticated, scope_for_list


logger = logging.getLogger(__name__)


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TodoQueryDispatcher:
    """Selects and runs the repository lookup matching a search."""

    def __init__(self, repository: TodoRepository) -> None:
        self.repository = repository

    def find(self, filters: SearchFilters, scope: Scope, window: PageWindow) -> TodoPage:
        name = _present(filters.name)
        priority = _present(filters.priority)
        owner = scope.owner_name
        repo = self.repository

        if name and priority:
            if owner is not None:
                return repo.find_by_name_and_priority_and_owner(name, priority, owner, window)
            return repo.find_by_name_and_priority(name, priority, window)
        if name:
            if owner is not None:
                return repo.find_by_name_and_owner(name, owner, window)
            return repo.find_by_name(name, window)
        if priority:
            if owner is not None:
                return repo.find_by_priority_and_owner(priority, owner, window)
            return repo.find_by_priority(priority, window)
        if owner is not None:
            return repo.find_by_owner(owner, window)
        return repo.find_all(window)

    def find_by_id(self, todo_id: int) -> Optional[TodoRead]:
        return self.repository.get(todo_id)

    async def search(
        self,
        identity: Optional[Identity],
        filters: SearchFilters,
        window: PageWindow,
    ) -> TodoPage:
        """Search the items visible to ``identity``.

        The scope comes from the ownership policy, so only admins ever
        reach the unscoped lookups.
        """
        identity = require_authenticated(identity)
        scope = scope_for_list(identity)
        logger.debug(
            "Search by %s: name=%r priority=%r unrestricted=%s",
            identity.name,
            filters.name,
            filters.priority,
            scope.is_unrestricted,
        )
        return self.find(filters, scope, window)
