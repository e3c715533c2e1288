"""Per-post pseudonym numbers for anonymous commenters."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from kukey_core.core.exceptions import PostNotFoundError
from kukey_core.db.session import run_in_transaction
from kukey_core.repositories.comment_repo import CommentRepository

logger = logging.getLogger(__name__)

AUTHOR_ANONYMOUS_NUMBER = 0


class AnonymousIdentityAssigner:
    """Assigns each user a stable anonymous number within a post.

    The post author always gets 0. Everyone else gets max+1 in order of
    first participation. Reading the current maximum and inserting the new
    row happen while the post row is locked, so concurrent first-time
    commenters on one post are numbered one after another. The unique
    constraints on (post, user) and (post, number) back this up: a lost race
    surfaces as an IntegrityError and the whole unit is replayed.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.comments = CommentRepository(db)

    def assign(self, post_id: int, user_id: int, is_post_author: bool) -> int:
        """Return the user's number on the post, creating it on first use."""
        return run_in_transaction(
            self.db,
            lambda db: self._assign(post_id, user_id, is_post_author),
        )

    def _assign(self, post_id: int, user_id: int, is_post_author: bool) -> int:
        if self.comments.get_post_for_update(post_id) is None:
            raise PostNotFoundError()

        existing = self.comments.get_anonymous_number(post_id, user_id)
        if existing is not None:
            return existing

        if is_post_author:
            number = AUTHOR_ANONYMOUS_NUMBER
        else:
            number = self.comments.max_anonymous_number(post_id) + 1
        self.comments.insert_anonymous_number(post_id, user_id, number)
        logger.debug("Assigned anonymous number %d to user %s on post %s", number, user_id, post_id)
        return number

    def lookup(self, post_id: int, user_id: int) -> int | None:
        return self.comments.get_anonymous_number(post_id, user_id)
