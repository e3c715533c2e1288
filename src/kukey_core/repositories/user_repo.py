"""Data access helpers for users, balances and characters."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from kukey_core.models.user import Character, User

__all__ = ["UserRepository"]


class UserRepository:
    """Row access for the user aggregate (balance, entitlement, character)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_for_update(self, user_id: int) -> User | None:
        """Return the user row locked for the rest of the transaction."""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def get_balance(self, user_id: int) -> int | None:
        return self.session.execute(select(User.point).where(User.id == user_id)).scalar()

    def set_balance(self, user_id: int, balance: int) -> int:
        """Write a new balance and return the number of rows affected."""
        result = self.session.execute(
            update(User).where(User.id == user_id).values(point=balance)
        )
        return result.rowcount

    def set_viewable_until(self, user_id: int, viewable_until: datetime) -> int:
        result = self.session.execute(
            update(User).where(User.id == user_id).values(viewable_until=viewable_until)
        )
        return result.rowcount

    def get_character(self, user_id: int) -> Character | None:
        stmt = (
            select(Character)
            .where(Character.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()
