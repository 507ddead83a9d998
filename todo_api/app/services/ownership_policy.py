"""
Ownership and role rules for todo items and accounts.

These functions are the single source of truth for every
authorization branch in the services: who may touch a record and which
records a listing may show.  They have no side effects.
"""

from dataclasses import dataclass
from typing import Optional

from todo_api.app.core.errors import Forbidden, Unauthenticated
from todo_api.app.schemas.identity import Identity, Role
from todo_api.app.schemas.todo import TodoRead


@dataclass(frozen=True)
class Scope:
    """Record visibility for one request.

    ``owner_name`` of ``None`` means every record is visible; otherwise
    only records owned by that login are.
    """

    owner_name: Optional[str] = None

    @classmethod
    def all(cls) -> "Scope":
        return cls()

    @classmethod
    def owned_by(cls, name: str) -> "Scope":
        return cls(owner_name=name)

    @property
    def is_unrestricted(self) -> bool:
        return self.owner_name is None


def is_admin(identity: Identity) -> bool:
    return identity.role == Role.ADMIN


def can_access(identity: Identity, item: TodoRead) -> bool:
    """Admins may access every item; everybody else only their own."""
    return is_admin(identity) or item.owner_name == identity.name


def scope_for_list(identity: Identity) -> Scope:
    if is_admin(identity):
        return Scope.all()
    return Scope.owned_by(identity.name)


def require_authenticated(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise Unauthenticated()
    return identity


def require_admin(identity: Optional[Identity]) -> Identity:
    identity = require_authenticated(identity)
    if not is_admin(identity):
        raise Forbidden(f"User {identity.name} is not an administrator")
    return identity
