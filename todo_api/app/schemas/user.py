"""
Pydantic models for accounts.

``AccountCreate`` carries the plaintext password only on the way in;
``AccountView`` is the only shape accounts leave the service layer in.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from .identity import Role
from .page import PageMeta


def _not_blank(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("must not be empty")
    return v


class AccountCreate(BaseModel):
    """Schema for creating an account.

    ``password`` is plaintext here and is hashed by ``UserService``
    before it reaches storage.
    """

    login: str = Field(..., examples=["alice"])
    password: str = Field(..., examples=["strongpassword"])
    role: Role = Field(Role.USER, examples=[Role.USER])

    @field_validator("login", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class AccountView(BaseModel):
    """Schema for reading an account from the API."""

    login: str
    role: Role

    model_config = {
        "from_attributes": True,
    }


class AccountPage(PageMeta):
    items: List[AccountView]


class RoleUpdate(BaseModel):
    role: Role


class PasswordUpdate(BaseModel):
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class GeneratedPassword(BaseModel):
    password: str


class LoginRequest(BaseModel):
    login: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
