"""
Business logic for account administration.

Everything except changing one's own password is reserved for
administrators.  An administrator cannot delete their own account or
change their own role, which guarantees at least one admin stays able
to manage the others.  Plaintext passwords only pass through this
service on their way to the hasher; a generated password is returned
exactly once, to the admin who requested the reset.
"""

import logging
import secrets
import string
from typing import Callable, Optional

from todo_api.app.core.errors import Conflict, Forbidden, NotFound
from todo_api.app.core.security import hash_password, verify_password
from todo_api.app.repositories.account_repository import AccountRecord, AccountRepository
from todo_api.app.schemas.identity import Identity, Role
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.user import AccountCreate, AccountPage, AccountView
from .ownership_policy import require_admin, require_authenticated


logger = logging.getLogger(__name__)

# ``legacy_range`` is every code point from '0' to 'z', which also
# admits :;<=>?@[\]^_` and matches passwords issued by older releases.
PASSWORD_ALPHABETS = {
    "alphanumeric": string.digits + string.ascii_uppercase + string.ascii_lowercase,
    "legacy_range": "".join(chr(code) for code in range(ord("0"), ord("z") + 1)),
}


def password_alphabet(charset: str) -> str:
    """Return the alphabet for a ``GENERATED_PASSWORD_CHARSET`` value.

    Raises ``ValueError`` for an unknown name; ``create_app`` calls this
    at startup so a bad setting stops the app instead of every request.
    """
    try:
        return PASSWORD_ALPHABETS[charset]
    except KeyError:
        raise ValueError(f"Unknown password charset {charset!r}") from None


def generate_password(length: int, alphabet: str) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


class UserService:
    """Account lifecycle operations with admin-only and self-protection rules."""

    def __init__(
        self,
        repository: AccountRepository,
        hasher: Callable[[str], str] = hash_password,
        verifier: Callable[[str, str], bool] = verify_password,
        password_length: int = 16,
        password_charset: str = "alphanumeric",
    ) -> None:
        self.repository = repository
        self.hasher = hasher
        self.verifier = verifier
        self.password_length = password_length
        self.password_alphabet = password_alphabet(password_charset)

    async def list_all(self, identity: Optional[Identity], window: PageWindow) -> AccountPage:
        require_admin(identity)
        return self.repository.find_all(window)

    async def create(self, identity: Optional[Identity], account: AccountCreate) -> AccountView:
        identity = require_admin(identity)
        if self.repository.exists(account.login):
            raise Conflict(f"User with login {account.login} already exists.")
        self.repository.insert(
            AccountRecord(login=account.login, password_hash=self.hasher(account.password), role=account.role)
        )
        logger.info("Admin %s created account %s with role %s", identity.name, account.login, account.role.value)
        return AccountView(login=account.login, role=account.role)

    async def delete(self, identity: Optional[Identity], login: str) -> None:
        identity = require_admin(identity)
        if login == identity.name:
            logger.warning("Admin %s tried to delete their own account", identity.name)
            raise Forbidden(f"Admin {identity.name} can not delete their own account")
        if not self.repository.delete(login):
            raise NotFound(f"User {login} not found")
        logger.info("Admin %s deleted account %s", identity.name, login)

    async def reset_password(self, identity: Optional[Identity], login: str) -> str:
        """Replace the password of ``login`` with a random one and return it in plaintext."""
        identity = require_admin(identity)
        self._require_exists(login)
        password = generate_password(self.password_length, self.password_alphabet)
        self.repository.update_password(login, self.hasher(password))
        logger.info("Admin %s reset the password of %s", identity.name, login)
        return password

    async def update_role(self, identity: Optional[Identity], login: str, role: Role) -> None:
        identity = require_admin(identity)
        self._require_exists(login)
        if login == identity.name:
            logger.warning("Admin %s tried to change their own role", identity.name)
            raise Forbidden(f"Admin {identity.name} can not change their own role")
        self.repository.update_role(login, role)
        logger.info("Admin %s set role of %s to %s", identity.name, login, role.value)

    async def update_password(self, identity: Optional[Identity], login: str, password: str) -> None:
        identity = require_authenticated(identity)
        self._require_exists(login)
        if login != identity.name:
            logger.warning("User %s tried to change the password of %s", identity.name, login)
            raise Forbidden(f"User {identity.name} can not change the password of {login}")
        self.repository.update_password(login, self.hasher(password))
        logger.info("User %s changed their password", identity.name)

    async def authenticate(self, login: str, password: str) -> Optional[Identity]:
        """Return the identity for valid credentials, otherwise ``None``."""
        account = self.repository.get(login)
        if account is None or not self.verifier(password, account.password_hash):
            return None
        return Identity(name=account.login, role=account.role)

    def _require_exists(self, login: str) -> None:
        if not self.repository.exists(login):
            raise NotFound(f"User {login} not found")
