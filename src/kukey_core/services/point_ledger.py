"""Point balance mutations with an immutable history trail."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from kukey_core.core.exceptions import InsufficientPointsError, PersistenceError, UserNotFoundError
from kukey_core.db.session import run_in_transaction
from kukey_core.models.point import PointHistory
from kukey_core.repositories.point_repo import PointHistoryRepository
from kukey_core.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class PointLedger:
    """Sole writer of user point balances.

    Every successful `adjust` writes the new balance and exactly one
    `PointHistory` row in the same unit of work. When called from inside an
    outer unit of work (for example an item purchase) it joins that unit, so
    a failure anywhere rolls back both the balance and the caller's changes.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.users = UserRepository(db)
        self.histories = PointHistoryRepository(db)

    def adjust(self, user_id: int, delta: int, reason: str) -> int:
        """Apply `delta` to the user's balance and return the new balance.

        Raises:
            UserNotFoundError: If the user does not exist.
            InsufficientPointsError: If the balance would drop below zero.
            PersistenceError: If the balance update touched no row.
        """
        return run_in_transaction(self.db, lambda db: self._apply(user_id, delta, reason))

    def _apply(self, user_id: int, delta: int, reason: str) -> int:
        user = self.users.get_for_update(user_id)
        if user is None:
            raise UserNotFoundError()

        new_balance = user.point + delta
        if new_balance < 0:
            logger.info(
                "Rejected point change for user %s: balance %d, delta %d",
                user_id, user.point, delta,
            )
            raise InsufficientPointsError()

        if not self.users.set_balance(user_id, new_balance):
            raise PersistenceError("Point update failed")
        self.histories.append(
            user_id=user_id,
            change_point=delta,
            history=reason,
            result_point=new_balance,
        )
        logger.debug("User %s balance %d -> %d (%s)", user_id, new_balance - delta, new_balance, reason)
        return new_balance

    def balance(self, user_id: int) -> int:
        balance = self.users.get_balance(user_id)
        if balance is None:
            raise UserNotFoundError()
        return balance

    def history(self, user_id: int) -> list[PointHistory]:
        """Return the user's point history, newest first."""
        if self.users.get_by_id(user_id) is None:
            raise UserNotFoundError()
        return self.histories.list_for_user(user_id)
