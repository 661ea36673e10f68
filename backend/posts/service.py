# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Post business logic – public reads and author-only mutations.

Ownership invariants
--------------------
* Update and delete first load the post: a missing id is a 404, checked
  before ownership.  A post owned by someone else is a 403.
* The mutation itself is a single conditional statement filtered on both
  ``id`` and ``author_id``.  If the post disappears between the check and
  the write, nothing is touched and the caller gets a 404.
"""

import re
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from core.errors import AuthorizationError, NotFoundError, ValidationError
from core.logger import logger
from models.post import Post
from models.user import User, utc_now

SUMMARY_LENGTH = 200
SUMMARY_SUFFIX = "..."

_TAG_RE = re.compile(r"<[^>]*>")

_NOT_FOUND = "Post not found"


def summarize(content: str) -> str:
    """
    Plain-text preview for list views: markup tags stripped, cut to the
    first 200 characters, and the ellipsis appended unconditionally.
    """
    return _TAG_RE.sub("", content or "")[:SUMMARY_LENGTH] + SUMMARY_SUFFIX


def validate_post_fields(title: str, content: str) -> None:
    errors = []
    if not 1 <= len(title or "") <= 255:
        errors.append({"field": "title", "msg": "Title must be between 1 and 255 characters"})
    if not content:
        errors.append({"field": "content", "msg": "Content is required"})
    if errors:
        raise ValidationError(errors)


def _to_dict(post: Post, author: str) -> Dict[str, Any]:
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "author_id": post.author_id,
        "author": author,
    }


def _to_summary(post: Post, author: str) -> Dict[str, Any]:
    row = _to_dict(post, author)
    del row["author_id"]
    row["summary"] = summarize(post.content)
    return row


def _with_author(db: Session):
    return db.query(Post, User.username).join(User, Post.author_id == User.id)


def _newest_first(query):
    # id breaks ties between posts created in the same instant
    return query.order_by(Post.created_at.desc(), Post.id.desc())


def _load_owned(db: Session, post_id: int, requester_id: int, verb: str) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if post is None:
        raise NotFoundError(_NOT_FOUND)
    if post.author_id != requester_id:
        raise AuthorizationError(f"You can only {verb} your own posts")
    return post


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def list_posts(db: Session) -> List[Dict[str, Any]]:
    """Every post, newest first, each with its author and summary."""
    rows = _newest_first(_with_author(db)).all()
    return [_to_summary(post, author) for post, author in rows]


def list_posts_by_author(db: Session, author_id: int) -> List[Dict[str, Any]]:
    rows = _newest_first(_with_author(db).filter(Post.author_id == author_id)).all()
    return [_to_summary(post, author) for post, author in rows]


def get_post(db: Session, post_id: int) -> Dict[str, Any]:
    row = _with_author(db).filter(Post.id == post_id).first()
    if row is None:
        raise NotFoundError(_NOT_FOUND)
    post, author = row
    return _to_dict(post, author)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def create_post(db: Session, author_id: int, title: str, content: str) -> Dict[str, Any]:
    validate_post_fields(title, content)

    now = utc_now()
    post = Post(title=title, content=content, author_id=author_id, created_at=now, updated_at=now)
    db.add(post)
    db.commit()

    logger.info("post_create id=%d author_id=%d", post.id, author_id)
    return get_post(db, post.id)


def update_post(db: Session, requester_id: int, post_id: int, title: str, content: str) -> Dict[str, Any]:
    """Overwrite title and content of a post owned by *requester_id*."""
    validate_post_fields(title, content)
    _load_owned(db, post_id, requester_id, "edit")

    updated = (
        db.query(Post)
        .filter(Post.id == post_id, Post.author_id == requester_id)
        .update(
            {Post.title: title, Post.content: content, Post.updated_at: utc_now()},
            synchronize_session="fetch",
        )
    )
    db.commit()
    if not updated:
        raise NotFoundError(_NOT_FOUND)

    logger.info("post_update id=%d author_id=%d", post_id, requester_id)
    return get_post(db, post_id)


def delete_post(db: Session, requester_id: int, post_id: int) -> None:
    """Permanently remove a post owned by *requester_id*."""
    _load_owned(db, post_id, requester_id, "delete")

    deleted = (
        db.query(Post)
        .filter(Post.id == post_id, Post.author_id == requester_id)
        .delete(synchronize_session="fetch")
    )
    db.commit()
    if not deleted:
        raise NotFoundError(_NOT_FOUND)

    logger.info("post_delete id=%d author_id=%d", post_id, requester_id)
