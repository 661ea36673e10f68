# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the post endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


# -- Requests --------------------------------------------------------------
# Create and update take the same body: both fields are always replaced.


class PostWriteRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


# -- Responses -------------------------------------------------------------
# ``author`` is the author's username, resolved at read time.


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    author_id: int
    author: str


class PostSummaryResponse(BaseModel):
    id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    author: str
    summary: str  # tag-stripped, first 200 chars, always ends with "..."


class PostMutationResponse(BaseModel):
    message: str
    post: PostResponse


class MessageResponse(BaseModel):
    message: str

