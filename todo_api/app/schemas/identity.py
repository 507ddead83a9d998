"""
The authenticated caller of a single request.
"""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Identity:
    """Resolved caller: the account login and its current role.

    Built by the identity provider in ``core.security`` and passed
    explicitly to every service operation.  Never persisted.
    """

    name: str
    role: Role
