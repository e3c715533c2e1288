"""Append-only access to point history."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from kukey_core.models.point import PointHistory

__all__ = ["PointHistoryRepository"]


class PointHistoryRepository:
    """Inserts and reads history rows; rows are never updated or deleted."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(self, *, user_id: int, change_point: int, history: str, result_point: int) -> PointHistory:
        entry = PointHistory(
            user_id=user_id,
            change_point=change_point,
            history=history,
            result_point=result_point,
        )
        self.session.add(entry)
        self.session.flush()
        return entry

    def list_for_user(self, user_id: int) -> list[PointHistory]:
        """Return the user's history, newest first."""
        stmt = (
            select(PointHistory)
            .where(PointHistory.user_id == user_id)
            .order_by(PointHistory.created_at.desc(), PointHistory.id.desc())
        )
        return list(self.session.execute(stmt).scalars())
