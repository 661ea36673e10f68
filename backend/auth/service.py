# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Auth business logic – signup, login and per-request authentication.

Security notes
--------------
* Login raises the *same* error whether the identifier doesn't exist or the
  password is wrong.  This prevents user-enumeration attacks.
* ``authenticate`` re-reads the user row on every call, so the returned
  username/email are current and a deleted account is rejected even while
  its token has not expired.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import AuthError, ConflictError, ValidationError
from core.logger import logger
from core.security import (
    AccessToken,
    hash_password,
    issue_access_token,
    verify_access_token,
    verify_password,
)
from models.user import User

# Generic message used for both "no such user" and "wrong password"
_LOGIN_FAIL = "Invalid credentials"
_CONFLICT = "Username or email already exists"

# field -> (min, max)
_SIGNUP_LIMITS = {
    "username": (1, 50),
    "email": (1, 100),
    "password": (6, 128),
}


def _length_errors(values: Dict[str, str], limits: Dict[str, Tuple[int, int]]) -> List[Dict[str, str]]:
    errors = []
    for field, (low, high) in limits.items():
        value = values.get(field) or ""
        if not low <= len(value) <= high:
            errors.append({
                "field": field,
                "msg": f"{field.capitalize()} must be between {low} and {high} characters",
            })
    return errors


def signup(db: Session, username: str, email: str, password: str) -> User:
    """Create a user.  Only the bcrypt hash of *password* is stored."""
    errors = _length_errors(
        {"username": username, "email": email, "password": password},
        _SIGNUP_LIMITS,
    )
    if errors:
        raise ValidationError(errors)

    existing = (
        db.query(User.id)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if existing:
        raise ConflictError(_CONFLICT)

    user = User(username=username, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup with the same name/email
        db.rollback()
        raise ConflictError(_CONFLICT)
    db.refresh(user)

    logger.info("user_signup id=%d username=%s", user.id, user.username)
    return user


def login(db: Session, identifier: str, password: str) -> Tuple[User, AccessToken]:
    """Authenticate by username or email and issue a signed access token."""
    user = (
        db.query(User)
        .filter(or_(User.username == identifier, User.email == identifier))
        .first()
    )

    # Unified failure path – no information leaks about whether the user exists
    if not user or not verify_password(password, user.password_hash):
        logger.info("user_login_failed")
        raise AuthError(_LOGIN_FAIL)

    token = issue_access_token(user.id)
    logger.info("user_login id=%d", user.id)
    return user, token


def authenticate(db: Session, token: Optional[str]) -> User:
    """Resolve a bearer token to the current User row."""
    if not token:
        raise AuthError("Access token required")

    user_id = verify_access_token(token)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise AuthError("User not found")
    return user
