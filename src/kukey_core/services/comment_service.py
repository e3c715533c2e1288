"""Comment creation, editing, deletion and likes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from kukey_core.core.exceptions import (
    CommentAccessForbiddenError,
    CommentNotFoundError,
    InvalidParentCommentError,
    PersistenceError,
    PostNotFoundError,
    SelfLikeForbiddenError,
)
from kukey_core.db.session import run_in_transaction
from kukey_core.db.time import utcnow
from kukey_core.models.community import Comment, CommentLike
from kukey_core.repositories.comment_repo import CommentRepository
from kukey_core.services.anonymous_identity import AnonymousIdentityAssigner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentView:
    """Comment together with the author's resolved pseudonym."""

    comment: Comment
    anonymous_number: int | None


class CommentService:
    """Write paths of a post's comment section."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.comments = CommentRepository(db)
        self.identities = AnonymousIdentityAssigner(db)

    def create_comment(
        self,
        user_id: int,
        post_id: int,
        content: str,
        is_anonymous: bool,
        parent_comment_id: int | None = None,
    ) -> CommentView:
        """Create a comment or reply and resolve its anonymous number.

        A reply to a reply is attached to the top-level comment instead.
        """

        def _create(db: Session) -> CommentView:
            post = self.comments.get_post_for_update(post_id)
            if post is None:
                raise PostNotFoundError()

            parent_id = self._resolve_parent(post_id, parent_comment_id)
            comment = self.comments.create_comment(
                post_id=post_id,
                user_id=user_id,
                content=content,
                is_anonymous=is_anonymous,
                parent_comment_id=parent_id,
            )
            if not self.comments.change_comment_count(post_id, 1):
                raise PersistenceError("Comment create failed")

            number = None
            if is_anonymous:
                number = self.identities.assign(post_id, user_id, post.user_id == user_id)
            return CommentView(comment=comment, anonymous_number=number)

        return run_in_transaction(self.db, _create)

    def _resolve_parent(self, post_id: int, parent_comment_id: int | None) -> int | None:
        if parent_comment_id is None:
            return None
        parent = self.comments.get_comment(parent_comment_id)
        if parent is None:
            raise CommentNotFoundError("Parent comment does not exist")
        if parent.post_id != post_id:
            raise InvalidParentCommentError()
        return parent.parent_comment_id or parent.id

    def update_comment(
        self,
        user_id: int,
        comment_id: int,
        content: str,
        is_anonymous: bool,
    ) -> CommentView:
        def _update(db: Session) -> CommentView:
            comment = self._owned(comment_id, user_id)
            comment.content = content
            comment.is_anonymous = is_anonymous
            db.flush()
            number = None
            if is_anonymous:
                post = self.comments.get_post(comment.post_id)
                number = self.identities.assign(
                    comment.post_id, user_id, post is not None and post.user_id == user_id
                )
            return CommentView(comment=comment, anonymous_number=number)

        return run_in_transaction(self.db, _update)

    def delete_comment(self, user_id: int, comment_id: int) -> None:
        """Soft-delete a comment and decrement the post's comment count."""

        def _delete(db: Session) -> None:
            comment = self._owned(comment_id, user_id)
            comment.deleted_at = utcnow()
            db.flush()
            if not self.comments.change_comment_count(comment.post_id, -1):
                raise PersistenceError("Comment delete failed")

        run_in_transaction(self.db, _delete)

    def toggle_like(self, user_id: int, comment_id: int) -> bool:
        """Like or unlike a comment; returns True when the comment is now liked."""

        def _toggle(db: Session) -> bool:
            comment = self.comments.get_comment(comment_id)
            if comment is None:
                raise CommentNotFoundError()
            if comment.user_id == user_id:
                raise SelfLikeForbiddenError()

            like = self.comments.get_like(comment_id, user_id)
            if like is not None:
                db.delete(like)
                db.flush()
                delta = -1
            else:
                db.add(CommentLike(comment_id=comment_id, user_id=user_id))
                db.flush()
                delta = 1
            if not self.comments.change_like_count(comment_id, delta):
                raise PersistenceError("Like update failed")
            return like is None

        return run_in_transaction(self.db, _toggle)

    def _owned(self, comment_id: int, user_id: int) -> Comment:
        comment = self.comments.get_comment(comment_id)
        if comment is None:
            raise CommentNotFoundError()
        if comment.user_id != user_id:
            raise CommentAccessForbiddenError()
        return comment
