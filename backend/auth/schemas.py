# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


# -- Requests --------------------------------------------------------------


class SignupRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    # username or email
    identifier: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# -- Responses -------------------------------------------------------------


class UserInfoResponse(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SignupResponse(BaseModel):
    message: str
    user: UserInfoResponse


class LoginResponse(BaseModel):
    message: str
    token: str
    token_type: str  # always "bearer"
    expires_at: datetime
    user: UserInfoResponse


class MeResponse(BaseModel):
    user: UserInfoResponse
