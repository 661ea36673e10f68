# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – signup, login, current-user info.

The handlers are thin: validation of the request shape happens in the
pydantic schemas, business rules and error raising in ``auth.service``.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import service
from auth.schemas import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    SignupRequest,
    SignupResponse,
)
from core.security import get_current_user
from database import get_db
from models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# POST /api/auth/signup
# ---------------------------------------------------------------------------


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    """Register a new account."""
    user = service.signup(db, body.username, body.email, body.password)
    return {"message": "User created successfully", "user": user}


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate and return a signed JWT."""
    user, token = service.login(db, body.identifier, body.password)
    return {
        "message": "Login successful",
        "token": token.value,
        "token_type": "bearer",
        "expires_at": token.expires_at,
        "user": user,
    }


# ---------------------------------------------------------------------------
# GET /api/auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's public profile (no secrets)."""
    return {"user": current_user}
