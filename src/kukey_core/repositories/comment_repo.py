"""Data access helpers for comments and their per-post pseudonyms."""
from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from kukey_core.models.community import Comment, CommentAnonymousNumber, CommentLike, Post

__all__ = ["CommentRepository"]


class CommentRepository:
    """Queries and counter updates for the comment section of posts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_post(self, post_id: int) -> Post | None:
        return self.session.get(Post, post_id)

    def get_post_for_update(self, post_id: int) -> Post | None:
        """Lock the post row; serializes pseudonym assignment per post."""
        stmt = (
            select(Post)
            .where(Post.id == post_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def get_comment(self, comment_id: int) -> Comment | None:
        stmt = select(Comment).where(Comment.id == comment_id, Comment.deleted_at.is_(None))
        return self.session.execute(stmt).scalars().first()

    def create_comment(
        self,
        *,
        post_id: int,
        user_id: int,
        content: str,
        is_anonymous: bool,
        parent_comment_id: int | None,
    ) -> Comment:
        comment = Comment(
            post_id=post_id,
            user_id=user_id,
            content=content,
            is_anonymous=is_anonymous,
            parent_comment_id=parent_comment_id,
        )
        self.session.add(comment)
        self.session.flush()
        return comment

    def change_comment_count(self, post_id: int, delta: int) -> int:
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(comment_count=Post.comment_count + delta)
        )
        return result.rowcount

    def change_like_count(self, comment_id: int, delta: int) -> int:
        result = self.session.execute(
            update(Comment)
            .where(Comment.id == comment_id)
            .values(like_count=Comment.like_count + delta)
        )
        return result.rowcount

    def get_like(self, comment_id: int, user_id: int) -> CommentLike | None:
        return self.session.get(CommentLike, (comment_id, user_id))

    def get_anonymous_number(self, post_id: int, user_id: int) -> int | None:
        stmt = select(CommentAnonymousNumber.anonymous_number).where(
            CommentAnonymousNumber.post_id == post_id,
            CommentAnonymousNumber.user_id == user_id,
        )
        return self.session.execute(stmt).scalar()

    def max_anonymous_number(self, post_id: int) -> int:
        """Return the highest non-author number on the post, 0 when none."""
        stmt = select(func.max(CommentAnonymousNumber.anonymous_number)).where(
            CommentAnonymousNumber.post_id == post_id,
            CommentAnonymousNumber.anonymous_number > 0,
        )
        return self.session.execute(stmt).scalar() or 0

    def insert_anonymous_number(self, post_id: int, user_id: int, anonymous_number: int) -> None:
        self.session.add(
            CommentAnonymousNumber(
                post_id=post_id,
                user_id=user_id,
                anonymous_number=anonymous_number,
            )
        )
        self.session.flush()

    def anonymous_numbers_for_post(self, post_id: int) -> dict[int, int]:
        """Map user id to anonymous number for every assignment on the post."""
        rows = self.session.execute(
            select(CommentAnonymousNumber.user_id, CommentAnonymousNumber.anonymous_number)
            .where(CommentAnonymousNumber.post_id == post_id)
        )
        return {user_id: number for user_id, number in rows}
