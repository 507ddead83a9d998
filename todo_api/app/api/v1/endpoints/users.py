"""
User endpoints for API v1.

Login, account listing and the account lifecycle operations.  Admin
checks and self-protection rules are enforced by ``UserService``; the
routes only resolve the caller and map payloads.
"""

from fastapi import APIRouter, Depends, Response, status

from todo_api.app.api.deps import get_page_window, get_user_service
from todo_api.app.core.errors import Unauthenticated
from todo_api.app.core.security import create_access_token, get_current_identity
from todo_api.app.schemas.identity import Identity
from todo_api.app.schemas.page import PageWindow
from todo_api.app.schemas.user import (
    AccountCreate,
    AccountPage,
    AccountView,
    GeneratedPassword,
    LoginRequest,
    PasswordUpdate,
    RoleUpdate,
    Token,
)
from todo_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/login", response_model=Token)
async def login(body: LoginRequest, service: UserService = Depends(get_user_service)) -> Token:
    """Exchange login and password for a bearer token."""
    identity = await service.authenticate(body.login, body.password)
    if identity is None:
        raise Unauthenticated("Invalid credentials")
    return Token(access_token=create_access_token(identity.name))


@router.get("/", response_model=AccountPage)
async def list_users(
    window: PageWindow = Depends(get_page_window),
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> AccountPage:
    """List all accounts.  Administrators only."""
    return await service.list_all(identity, window)


@router.post("/", response_model=AccountView, status_code=status.HTTP_201_CREATED)
async def create_user(
    account: AccountCreate,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> AccountView:
    """Create an account.  Administrators only; 409 if the login is taken."""
    return await service.create(identity, account)


@router.delete("/{login}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(
    login: str,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> None:
    """Delete an account.  Administrators cannot delete themselves."""
    await service.delete(identity, login)


@router.post("/{login}/reset-password", response_model=GeneratedPassword)
async def reset_password(
    login: str,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> GeneratedPassword:
    """Generate a new random password for ``login`` and return it once."""
    return GeneratedPassword(password=await service.reset_password(identity, login))


@router.patch("/{login}/role", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_role(
    login: str,
    body: RoleUpdate,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> None:
    await service.update_role(identity, login, body.role)


@router.patch("/{login}/password", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_password(
    login: str,
    body: PasswordUpdate,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> None:
    """Change one's own password."""
    await service.update_password(identity, login, body.password)
