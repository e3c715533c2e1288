"""Data access helpers for the timetable aggregate."""
from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from kukey_core.models.course import Course
from kukey_core.models.timetable import Timetable, TimetableCourse

__all__ = ["TimetableRepository"]


class TimetableRepository:
    """Queries and writes scoped to timetables and their course entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, timetable_id: int) -> Timetable | None:
        return self.session.get(Timetable, timetable_id)

    def get_for_update(self, timetable_id: int) -> Timetable | None:
        """Return the timetable row locked for the rest of the transaction."""
        stmt = (
            select(Timetable)
            .where(Timetable.id == timetable_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def table_numbers_for_semester(self, user_id: int, year: str, semester: str) -> set[int]:
        stmt = select(Timetable.table_number).where(
            Timetable.user_id == user_id,
            Timetable.year == year,
            Timetable.semester == semester,
        )
        return set(self.session.execute(stmt).scalars())

    def list_for_semester(self, user_id: int, year: str, semester: str) -> list[Timetable]:
        stmt = (
            select(Timetable)
            .where(
                Timetable.user_id == user_id,
                Timetable.year == year,
                Timetable.semester == semester,
            )
            .order_by(Timetable.table_number)
        )
        return list(self.session.execute(stmt).scalars())

    def get_main(self, user_id: int, year: str, semester: str) -> Timetable | None:
        stmt = select(Timetable).where(
            Timetable.user_id == user_id,
            Timetable.year == year,
            Timetable.semester == semester,
            Timetable.main_timetable.is_(True),
        )
        return self.session.execute(stmt).scalars().first()

    def create(
        self,
        *,
        user_id: int,
        year: str,
        semester: str,
        table_name: str,
        main_timetable: bool,
        table_number: int,
    ) -> Timetable:
        timetable = Timetable(
            user_id=user_id,
            year=year,
            semester=semester,
            table_name=table_name,
            main_timetable=main_timetable,
            table_number=table_number,
        )
        self.session.add(timetable)
        self.session.flush()
        return timetable

    def clear_main(self, user_id: int, year: str, semester: str) -> None:
        """Unset the main flag on every timetable of the group."""
        self.session.execute(
            update(Timetable)
            .where(
                Timetable.user_id == user_id,
                Timetable.year == year,
                Timetable.semester == semester,
            )
            .values(main_timetable=False)
        )

    def has_course(self, timetable_id: int, course_id: int) -> bool:
        return self.session.get(TimetableCourse, (timetable_id, course_id)) is not None

    def add_course(self, timetable_id: int, course_id: int) -> TimetableCourse:
        entry = TimetableCourse(timetable_id=timetable_id, course_id=course_id)
        self.session.add(entry)
        self.session.flush()
        return entry

    def remove_course(self, timetable_id: int, course_id: int) -> int:
        """Delete a course entry and return the number of rows removed."""
        result = self.session.execute(
            delete(TimetableCourse).where(
                TimetableCourse.timetable_id == timetable_id,
                TimetableCourse.course_id == course_id,
            )
        )
        return result.rowcount

    def list_courses(self, timetable_id: int) -> list[Course]:
        stmt = (
            select(Course)
            .join(TimetableCourse, TimetableCourse.course_id == Course.id)
            .where(TimetableCourse.timetable_id == timetable_id)
            .order_by(Course.id)
        )
        return list(self.session.execute(stmt).scalars())

    def delete(self, timetable: Timetable) -> None:
        self.session.delete(timetable)
        self.session.flush()
