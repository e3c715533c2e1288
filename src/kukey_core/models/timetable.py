# src/kukey_core/models/timetable.py
"""Timetable aggregate: the timetable row and its course memberships."""

from sqlalchemy import Boolean, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kukey_core.db.session import Base
from kukey_core.db.types import IdType


class Timetable(Base):
    """A user's timetable for one (year, semester).

    Aggregate root: course memberships are only created or removed through
    the timetable service, which also owns the quota and main-flag rules.
    """

    __tablename__ = "timetable"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "year", "semester", "table_number",
            name="uq_timetable_user_semester_number",
        ),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year: Mapped[str] = mapped_column(Text, nullable=False)
    semester: Mapped[str] = mapped_column(Text, nullable=False)
    table_name: Mapped[str] = mapped_column(Text, nullable=False)
    main_timetable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # 1..limit, assigned sequentially at creation.
    table_number: Mapped[int] = mapped_column(Integer, nullable=False)

    courses: Mapped[list["TimetableCourse"]] = relationship(
        "TimetableCourse",
        back_populates="timetable",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TimetableCourse(Base):
    """Join row placing a course in a timetable."""

    __tablename__ = "timetable_course"

    # Composite primary key prevents the same course twice in one timetable.
    timetable_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("timetable.id", ondelete="CASCADE"),
        primary_key=True,
    )
    course_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("course.id", ondelete="CASCADE"),
        primary_key=True,
    )

    timetable: Mapped[Timetable] = relationship("Timetable", back_populates="courses")
