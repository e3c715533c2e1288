# src/kukey_core/models/community.py
"""Community posts, comments, likes and per-post anonymous numbers."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from kukey_core.db.session import Base
from kukey_core.db.types import IdType
from kukey_core.db.time import utcnow


class Post(Base):
    """Board post; only the columns the comment path relies on."""

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    board_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Comment(Base):
    """Comment or one-level reply on a post."""

    __tablename__ = "comment"
    __table_args__ = (
        Index("ix_comment_post_id", "post_id"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    post_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Always a top-level comment id; replies are never nested deeper.
    parent_comment_id: Mapped[int | None] = mapped_column(
        IdType,
        ForeignKey("comment.id"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class CommentLike(Base):
    """Per-user like on a comment."""

    __tablename__ = "comment_like"

    comment_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )


class CommentAnonymousNumber(Base):
    """Stable pseudonym of a user within one post's comment section.

    0 is reserved for the post author; everyone else gets 1, 2, ... in order
    of their first anonymous comment.
    """

    __tablename__ = "comment_anonymous_number"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_anonymous_number_post_user"),
        UniqueConstraint("post_id", "anonymous_number", name="uq_anonymous_number_post_number"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    post_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    anonymous_number: Mapped[int] = mapped_column(Integer, nullable=False)
