"""
Business logic for individual todo items.

``TodoService`` enforces ownership on create, read, update and delete.
The owner of an item is always server controlled: it is the caller on
creation and is carried over from the stored record on update.

An update of an id that does not exist creates a new item with a
fresh id instead of failing.  Existing clients rely on this
merge-or-create behaviour.
"""

import logging
from typing import Optional

from todo_api.app.core.errors import Forbidden, NotFound
from todo_api.app.repositories.todo_repository import TodoRepository
from todo_api.app.schemas.identity import Identity
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.todo import SearchFilters, TodoDraft, TodoPage, TodoRead
from .ownership_policy import can_access, require_authenticated, scope_for_list
from .todo_query_dispatcher import TodoQueryDispatcher


logger = logging.getLogger(__name__)


class TodoService:
    """Create, read, update and delete todo items on behalf of a caller."""

    def __init__(self, repository: TodoRepository, dispatcher: Optional[TodoQueryDispatcher] = None) -> None:
        self.repository = repository
        self.dispatcher = dispatcher or TodoQueryDispatcher(repository)

    async def list_all(self, identity: Optional[Identity], window: PageWindow) -> TodoPage:
        """Return every item visible to the caller, without filters."""
        identity = require_authenticated(identity)
        return self.dispatcher.find(SearchFilters(), scope_for_list(identity), window)

    async def create(self, identity: Optional[Identity], draft: TodoDraft) -> int:
        """Store ``draft`` as a new item owned by the caller and return its id."""
        identity = require_authenticated(identity)
        created = self.repository.insert(draft, owner_name=identity.name)
        logger.info("User %s created todo %s", identity.name, created.id)
        return created.id

    async def get(self, identity: Optional[Identity], todo_id: int) -> TodoRead:
        identity = require_authenticated(identity)
        return self._load_accessible(identity, todo_id, "get")

    async def update(self, identity: Optional[Identity], todo_id: int, draft: TodoDraft) -> None:
        """Replace an item, or create a new one if ``todo_id`` does not exist.

        The stored owner is kept; whatever owner the client sent was
        already dropped when the draft was parsed.
        """
        identity = require_authenticated(identity)
        current = self.dispatcher.find_by_id(todo_id)
        if current is None:
            new_id = await self.create(identity, draft)
            logger.info("Todo %s did not exist, update by %s created todo %s", todo_id, identity.name, new_id)
            return
        self._check_access(identity, current, "update")
        self.repository.replace(todo_id, draft, owner_name=current.owner_name)
        logger.info("User %s updated todo %s", identity.name, todo_id)

    async def delete(self, identity: Optional[Identity], todo_id: int) -> None:
        identity = require_authenticated(identity)
        self._load_accessible(identity, todo_id, "delete")
        self.repository.delete(todo_id)
        logger.info("User %s deleted todo %s", identity.name, todo_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _load_accessible(self, identity: Identity, todo_id: int, action: str) -> TodoRead:
        # Existence is checked first: a missing id is NotFound for everybody.
        item = self.dispatcher.find_by_id(todo_id)
        if item is None:
            raise NotFound(f"Todo {todo_id} not found")
        self._check_access(identity, item, action)
        return item

    @staticmethod
    def _check_access(identity: Identity, item: TodoRead, action: str) -> None:
        if not can_access(identity, item):
            logger.warning("User %s tried to %s todo %s owned by someone else", identity.name, action, item.id)
            raise Forbidden(f"User {identity.name} tried to {action} todo {item.id} which does not belong to them")
