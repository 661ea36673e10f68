# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives and the auth guard
live here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (bcrypt, cost 12)
2. Access token issue / verification        (PyJWT / HS256)
3. FastAPI dependency guard                 (get_current_user)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt as _jwt        # PyJWT
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from core.config import settings
from core.errors import AuthError
from database import get_db

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# 1.  bcrypt – password hashing
# ---------------------------------------------------------------------------
# The salt and cost factor are embedded in the hash string, so a single
# column is enough.  bcrypt only looks at the first 72 bytes of input.
# ---------------------------------------------------------------------------

_BCRYPT_MAX_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    return (plain or "").encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> str:
    """Hash a plaintext password with bcrypt using ``settings.bcrypt_rounds``."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(plain), salt).decode("utf-8")


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.  A malformed hash never matches.
    """
    hashed = (stored_hash or "").encode("utf-8")
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed)
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# 2.  JWT – access tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccessToken:
    """An issued, signed session token and the moment it stops being valid."""

    value: str
    expires_at: datetime


def issue_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> AccessToken:
    """
    Sign a JWT asserting *user_id*.  ``iat`` and ``exp`` claims are added
    automatically; the lifetime defaults to
    ``settings.access_token_expire_minutes``.
    """
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": str(user_id), "iat": issued_at, "exp": expires_at}
    token = _jwt.encode(payload, settings.secret_key, algorithm=_ALGORITHM)
    return AccessToken(value=token, expires_at=expires_at)


def verify_access_token(token: str) -> int:
    """
    Verify a JWT and return the user id it asserts.  Raises ``AuthError`` on
    any failure (expired, bad signature, malformed, non-numeric subject).
    """
    try:
        payload = _jwt.decode(
            token,
            settings.secret_key,
            algorithms=[_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
        return int(payload["sub"])
    except (_jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        raise AuthError("Invalid or expired token")


# ---------------------------------------------------------------------------
# 3.  FastAPI dependency guard
# ---------------------------------------------------------------------------

# The tokenUrl here is only used by the auto-generated OpenAPI docs.
# auto_error is off so a missing header reaches authenticate() and gets the
# same error body as every other auth failure.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db=Depends(get_db),
):
    """
    Dependency: verify the bearer token and re-read the User row, so a
    deleted account holding an unexpired token is rejected.

    Raises 401 if the token is missing or invalid or the user is gone.
    """
    # Lazy import to avoid circular dependency at module load time
    from auth import service as auth_service  # noqa: E402

    return auth_service.authenticate(db, token)


# -- IP Address extraction ----------------------------------------------------


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP address from the request.
    Checks X-Forwarded-For header first (for proxies), then falls back to client host.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first (original client)
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"
