"""Daily attendance check that earns points."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from kukey_core.core.exceptions import AlreadyCheckedInError, UserNotFoundError
from kukey_core.core.settings import settings
from kukey_core.db.session import run_in_transaction
from kukey_core.db.time import utcnow
from kukey_core.models.point import AttendanceCheck
from kukey_core.repositories.user_repo import UserRepository
from kukey_core.services.point_ledger import PointLedger

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, db: Session, *, ledger: PointLedger | None = None) -> None:
        self.db = db
        self.users = UserRepository(db)
        self.ledger = ledger or PointLedger(db)

    def check_in(self, user_id: int, today: date | None = None) -> int:
        """Record today's attendance and return the new balance.

        Raises:
            AlreadyCheckedInError: If the user already checked in on `today`.
        """
        day = today or utcnow().date()

        def _check_in(db: Session) -> int:
            if self.users.get_for_update(user_id) is None:
                raise UserNotFoundError()
            existing = db.execute(
                select(AttendanceCheck.id).where(
                    AttendanceCheck.user_id == user_id,
                    AttendanceCheck.checked_on == day,
                )
            ).first()
            if existing is not None:
                raise AlreadyCheckedInError()
            db.add(AttendanceCheck(user_id=user_id, checked_on=day))
            db.flush()
            return self.ledger.adjust(user_id, settings.attendance_points, f"Attendance check {day.isoformat()}")

        balance = run_in_transaction(self.db, _check_in)
        logger.info("User %s checked in on %s", user_id, day)
        return balance
