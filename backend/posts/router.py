# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Post endpoints – public reads, author-only writes.

Security invariants enforced by the handlers
--------------------------------------------
* Listing and reading posts needs no token.
* Create, update, delete and "my posts" require a valid JWT (via
  ``get_current_user``), which also confirms the user still exists.
* Update and delete verify ownership in ``posts.service``.  Even if a caller
  guesses another user's post ID, the request is rejected with 403.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from core.security import get_current_user
from database import get_db
from models.user import User
from posts import service
from posts.schemas import (
    MessageResponse,
    PostMutationResponse,
    PostResponse,
    PostSummaryResponse,
    PostWriteRequest,
)

router = APIRouter(prefix="/api/posts", tags=["posts"])


# posts.id is a signed 32-bit INT
_MAX_POST_ID = 2**31 - 1


def _post_id(post_id: str) -> int:
    """Parse the path id.  Anything that cannot name a row is a 404."""
    try:
        value = int(post_id)
    except ValueError:
        raise NotFoundError("Post not found")
    if not 0 < value <= _MAX_POST_ID:
        raise NotFoundError("Post not found")
    return value


# ---------------------------------------------------------------------------
# GET /api/posts  – every post, newest first
# ---------------------------------------------------------------------------


@router.get("", response_model=List[PostSummaryResponse])
def list_posts(db: Session = Depends(get_db)):
    return service.list_posts(db)


# ---------------------------------------------------------------------------
# GET /api/posts/user/my-posts  – the caller's own posts
# ---------------------------------------------------------------------------


@router.get("/user/my-posts", response_model=List[PostSummaryResponse])
def my_posts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.list_posts_by_author(db, current_user.id)


# ---------------------------------------------------------------------------
# GET /api/posts/{id}  – a single post
# ---------------------------------------------------------------------------


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, db: Session = Depends(get_db)):
    return service.get_post(db, _post_id(post_id))


# ---------------------------------------------------------------------------
# POST /api/posts  – create
# ---------------------------------------------------------------------------


@router.post("", response_model=PostMutationResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostWriteRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = service.create_post(db, current_user.id, body.title, body.content)
    return {"message": "Post created successfully", "post": post}


# ---------------------------------------------------------------------------
# PUT /api/posts/{id}  – replace title and content
# ---------------------------------------------------------------------------


@router.put("/{post_id}", response_model=PostMutationResponse)
def update_post(
    post_id: str,
    body: PostWriteRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = service.update_post(db, current_user.id, _post_id(post_id), body.title, body.content)
    return {"message": "Post updated successfully", "post": post}


# ---------------------------------------------------------------------------
# DELETE /api/posts/{id}  – remove
# ---------------------------------------------------------------------------


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Permanently delete a post.  Ownership is verified first."""
    service.delete_post(db, current_user.id, _post_id(post_id))
    return {"message": "Post deleted successfully"}
