"""Timetable rules: per-semester quota, main timetable and course conflicts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from kukey_core.core.exceptions import (
    CourseNotFoundError,
    DuplicateTimetableCourseError,
    ScheduleConflictError,
    TimetableAccessForbiddenError,
    TimetableNotFoundError,
    TimetableQuotaExceededError,
    UserNotFoundError,
)
from kukey_core.core.settings import settings
from kukey_core.db.session import run_in_transaction
from kukey_core.models.course import Course
from kukey_core.models.timetable import Timetable, TimetableCourse
from kukey_core.repositories.course_repo import CourseRepository
from kukey_core.repositories.timetable_repo import TimetableRepository
from kukey_core.repositories.user_repo import UserRepository
from kukey_core.services.schedule_conflict import conflicts

logger = logging.getLogger(__name__)


def default_table_name(year: str, semester: str, table_number: int) -> str:
    """Return the name given to a timetable created without one, e.g. "2024-1(2)"."""
    return f"{year}-{semester}({table_number})"


class TimetableService:
    """Owns every write to timetables and their course entries.

    Invariants per (user, year, semester): at most `settings.timetable_limit`
    timetables, sequential table numbers, at most one main timetable, and no
    two courses in one timetable meeting in overlapping periods.
    """

    def __init__(self, db: Session, *, limit: int | None = None) -> None:
        self.db = db
        self.limit = settings.timetable_limit if limit is None else limit
        self.timetables = TimetableRepository(db)
        self.courses = CourseRepository(db)
        self.users = UserRepository(db)

    def create_timetable(
        self,
        user_id: int,
        year: str,
        semester: str,
        requested_name: str | None = None,
    ) -> Timetable:
        """Create the next timetable of the user's semester.

        The first timetable of a semester becomes the main one.

        Raises:
            TimetableQuotaExceededError: If the semester already holds the maximum.
        """
        return run_in_transaction(
            self.db,
            lambda db: self._create_timetable(user_id, year, semester, requested_name),
        )

    def _create_timetable(
        self,
        user_id: int,
        year: str,
        semester: str,
        requested_name: str | None,
    ) -> Timetable:
        # Locking the owner serializes concurrent creates for the same user.
        if self.users.get_for_update(user_id) is None:
            raise UserNotFoundError()

        used = self.timetables.table_numbers_for_semester(user_id, year, semester)
        count = len(used)
        if count >= self.limit:
            logger.info("User %s hit the timetable limit for %s-%s", user_id, year, semester)
            raise TimetableQuotaExceededError()

        # Slot numbers freed by deletes are reused, lowest first.
        table_number = min(n for n in range(1, self.limit + 1) if n not in used)
        return self.timetables.create(
            user_id=user_id,
            year=year,
            semester=semester,
            table_name=requested_name or default_table_name(year, semester, table_number),
            main_timetable=count == 0,
            table_number=table_number,
        )

    def add_course(self, timetable_id: int, course_id: int, *, user_id: int) -> TimetableCourse:
        """Place a course in a timetable if it fits.

        Raises:
            TimetableNotFoundError: If the timetable does not exist.
            TimetableAccessForbiddenError: If it belongs to another user.
            CourseNotFoundError: If the course does not exist.
            DuplicateTimetableCourseError: If the course is already present.
            ScheduleConflictError: If a meeting time overlaps an existing course.
            MalformedPeriodError: If a catalog meeting time cannot be parsed.
        """
        return run_in_transaction(
            self.db,
            lambda db: self._add_course(timetable_id, course_id, user_id),
        )

    def _add_course(self, timetable_id: int, course_id: int, user_id: int) -> TimetableCourse:
        # The lock makes the conflict check and the insert atomic per timetable.
        self._owned_for_update(timetable_id, user_id)
        if not self.courses.course_exists(course_id):
            raise CourseNotFoundError()
        if self.timetables.has_course(timetable_id, course_id):
            raise DuplicateTimetableCourseError()

        existing = self.courses.get_timetable_time_slots(timetable_id)
        candidate = self.courses.get_time_slots(course_id)
        if conflicts(existing, candidate):
            logger.info("Course %s conflicts with timetable %s", course_id, timetable_id)
            raise ScheduleConflictError()

        return self.timetables.add_course(timetable_id, course_id)

    def remove_course(self, timetable_id: int, course_id: int, *, user_id: int) -> None:
        """Remove a course from a timetable; absent entries are ignored."""

        def _remove(db: Session) -> None:
            self._owned_for_update(timetable_id, user_id)
            removed = self.timetables.remove_course(timetable_id, course_id)
            if not removed:
                logger.debug("Course %s was not in timetable %s", course_id, timetable_id)

        run_in_transaction(self.db, _remove)

    def rename_timetable(self, timetable_id: int, name: str, *, user_id: int) -> Timetable:
        def _rename(db: Session) -> Timetable:
            timetable = self._owned_for_update(timetable_id, user_id)
            timetable.table_name = name
            db.flush()
            return timetable

        return run_in_transaction(self.db, _rename)

    def set_main(self, timetable_id: int, *, user_id: int) -> Timetable:
        """Make a timetable the main one of its semester.

        The previous main timetable of the group loses the flag in the same
        transaction, so exactly one remains flagged.
        """

        def _set_main(db: Session) -> Timetable:
            timetable = self._owned_for_update(timetable_id, user_id)
            self.users.get_for_update(user_id)
            self.timetables.clear_main(user_id, timetable.year, timetable.semester)
            timetable.main_timetable = True
            db.flush()
            return timetable

        return run_in_transaction(self.db, _set_main)

    def delete_timetable(self, timetable_id: int, *, user_id: int) -> None:
        """Delete a timetable with its course entries.

        Deleting the main timetable does not promote another one.
        """

        def _delete(db: Session) -> None:
            timetable = self._owned_for_update(timetable_id, user_id)
            self.timetables.delete(timetable)

        run_in_transaction(self.db, _delete)

    def get_main_timetable(self, user_id: int, year: str, semester: str) -> Timetable:
        timetable = self.timetables.get_main(user_id, year, semester)
        if timetable is None:
            raise TimetableNotFoundError("Main timetable not found")
        return timetable

    def list_timetables(self, user_id: int, year: str, semester: str) -> list[Timetable]:
        return self.timetables.list_for_semester(user_id, year, semester)

    def get_courses(self, timetable_id: int, *, user_id: int) -> list[Course]:
        self._owned(self.timetables.get_by_id(timetable_id), user_id)
        return self.timetables.list_courses(timetable_id)

    def _owned_for_update(self, timetable_id: int, user_id: int) -> Timetable:
        return self._owned(self.timetables.get_for_update(timetable_id), user_id)

    @staticmethod
    def _owned(timetable: Timetable | None, user_id: int) -> Timetable:
        if timetable is None:
            raise TimetableNotFoundError()
        if timetable.user_id != user_id:
            raise TimetableAccessForbiddenError()
        return timetable
