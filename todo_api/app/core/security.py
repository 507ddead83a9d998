"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens carry the
account login in ``sub`` and an expiration timestamp (``exp``).  A
secret key from the application settings is used to sign and verify
the token.  Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a random
salt.

``get_current_identity`` is the identity provider for the HTTP layer:
it turns the bearer token of a request into an ``Identity``.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from todo_api.app.repositories.account_repository import AccountRepository
from todo_api.app.schemas.identity import Identity
from .config import settings
from .errors import Unauthenticated


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
TOKEN_ALGORITHM = "HS256"


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(login: str, expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT for ``login``.

    Parameters
    ----------
    login : str
        Account login stored as the ``sub`` claim.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    claims = {"sub": login, "exp": int(time.time()) + exp_seconds}
    header = {"alg": TOKEN_ALGORITHM, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, object]]:
    """Verify and decode a JWT.

    Returns the claims if the signature matches, the header names
    ``HS256`` and the token has not expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        if not isinstance(header, dict) or header.get("alg") != TOKEN_ALGORITHM:
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(data, dict) or data.get("exp") is None:
            return None
        if int(data["exp"]) < int(time.time()):
            return None
    except (ValueError, TypeError):
        # Malformed base64, JSON or ``exp`` claim.
        return None
    return data


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The result
    is ``"<salt hex>$<hash hex>"``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string."""
    salt_hex, sep, hash_hex = hashed_password.partition("$")
    if not sep:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


security = HTTPBearer(auto_error=False)


def get_account_repository() -> AccountRepository:
    return AccountRepository()


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    accounts: AccountRepository = Depends(get_account_repository),
) -> Identity:
    """Dependency that resolves the caller of the current request.

    Raises ``Unauthenticated`` when the ``Authorization`` header is
    missing, the token is invalid or expired, or its subject no longer
    exists.  The role is read from storage on every request so role
    changes apply immediately.
    """
    if credentials is None:
        raise Unauthenticated()
    payload = decode_access_token(credentials.credentials)
    if not payload or not isinstance(payload.get("sub"), str):
        raise Unauthenticated("Invalid or expired token")
    account = accounts.get(payload["sub"])
    if account is None:
        logger.info("Token presented for unknown account %s", payload["sub"])
        raise Unauthenticated("User no longer exists")
    return Identity(name=account.login, role=account.role)
