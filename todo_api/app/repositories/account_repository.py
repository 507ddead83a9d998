"""
SQLite storage for accounts.

``AccountRecord`` includes the password hash and never leaves the
service layer; services convert it to ``AccountView`` before returning.
Role and password changes are single ``UPDATE`` statements so they do
not need a read-modify-write round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from todo_api.app.core.db import get_cursor
from todo_api.app.schemas.identity import Role
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.user import AccountPage, AccountView
from .paging import order_and_limit


_SORTABLE = ("login", "role")


@dataclass
class AccountRecord:
    login: str
    password_hash: str
    role: Role


class AccountRepository:
    """Storage collaborator for accounts keyed by login."""

    def exists(self, login: str) -> bool:
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT 1 FROM accounts WHERE login = ?", (login,)
            ).fetchone()
        return row is not None

    def get(self, login: str) -> Optional[AccountRecord]:
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT login, password_hash, role FROM accounts WHERE login = ?",
                (login,),
            ).fetchone()
        if not row:
            return None
        return AccountRecord(login=row["login"], password_hash=row["password_hash"], role=Role(row["role"]))

    def find_all(self, window: PageWindow) -> AccountPage:
        suffix, page_params = order_and_limit(window, _SORTABLE, "login")
        with get_cursor() as cursor:
            total = cursor.execute("SELECT COUNT(*) AS count FROM accounts").fetchone()["count"]
            rows = cursor.execute(
                f"SELECT login, role FROM accounts{suffix}", tuple(page_params)
            ).fetchall()
        return AccountPage(
            items=[AccountView(login=row["login"], role=Role(row["role"])) for row in rows],
            total=total,
            limit=window.limit,
            offset=window.offset,
        )

    def insert(self, record: AccountRecord) -> None:
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO accounts (login, password_hash, role) VALUES (?, ?, ?)",
                (record.login, record.password_hash, record.role.value),
            )

    def delete(self, login: str) -> bool:
        """Delete the account; return ``False`` if no row matched."""
        with get_cursor() as cursor:
            cursor.execute("DELETE FROM accounts WHERE login = ?", (login,))
            return cursor.rowcount > 0

    def update_password(self, login: str, password_hash: str) -> None:
        with get_cursor() as cursor:
            cursor.execute(
                "UPDATE accounts SET password_hash = ?, updated_at = CURRENT_TIMESTAMP WHERE login = ?",
                (password_hash, login),
            )

    def update_role(self, login: str, role: Role) -> None:
        with get_cursor() as cursor:
            cursor.execute(
                "UPDATE accounts SET role = ?, updated_at = CURRENT_TIMESTAMP WHERE login = ?",
                (role.value, login),
            )
