# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""Post ORM model."""

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from database import Base, Timestamp
from models.user import utc_now


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    # May contain markup; stripped only when building list summaries.
    content = Column(Text, nullable=False)
    # Cascade delete: removing a user removes all their posts atomically.
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Set application-side, microsecond precision
    created_at = Column(Timestamp, default=utc_now, nullable=False, index=True)
    updated_at = Column(Timestamp, default=utc_now, onupdate=utc_now, nullable=False)

    author = relationship("User", back_populates="posts")
