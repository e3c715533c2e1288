# src/kukey_core/models/point.py
"""Point ledger history and attendance records."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from kukey_core.db.session import Base
from kukey_core.db.types import IdType
from kukey_core.db.time import utcnow


class PointHistory(Base):
    """Append-only record of one balance mutation."""

    __tablename__ = "point_history"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Signed delta; negative for purchases.
    change_point: Mapped[int] = mapped_column(Integer, nullable=False)
    history: Mapped[str] = mapped_column(Text, nullable=False)
    result_point: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class AttendanceCheck(Base):
    """Daily check-in that earns points once per calendar day."""

    __tablename__ = "attendance_check"
    __table_args__ = (
        UniqueConstraint("user_id", "checked_on", name="uq_attendance_user_day"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    checked_on: Mapped[date] = mapped_column(Date, nullable=False)
