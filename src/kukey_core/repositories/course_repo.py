"""Read access to the course catalog and its meeting times."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from kukey_core.models.course import Course, CourseDetail
from kukey_core.models.timetable import TimetableCourse
from kukey_core.services.schedule_conflict import TimeSlot

__all__ = ["CourseRepository"]


class CourseRepository:
    """Thin wrapper around catalog queries used by the timetable rules."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def course_exists(self, course_id: int) -> bool:
        stmt = select(Course.id).where(Course.id == course_id)
        return self.session.execute(stmt).first() is not None

    def get_time_slots(self, course_id: int) -> set[TimeSlot]:
        """Return every meeting time of a course.

        Raises:
            MalformedPeriodError: If a catalog row carries an unparseable period.
        """
        rows = self.session.execute(
            select(CourseDetail.day, CourseDetail.period).where(CourseDetail.course_id == course_id)
        )
        return {TimeSlot.from_catalog(day, period) for day, period in rows}

    def get_timetable_time_slots(self, timetable_id: int) -> set[TimeSlot]:
        """Return the meeting times of every course currently in a timetable."""
        rows = self.session.execute(
            select(CourseDetail.day, CourseDetail.period)
            .join(TimetableCourse, TimetableCourse.course_id == CourseDetail.course_id)
            .where(TimetableCourse.timetable_id == timetable_id)
        )
        return {TimeSlot.from_catalog(day, period) for day, period in rows}
