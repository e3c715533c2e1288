# tests/test_timetable_service.py
"""Tests for timetable quota, main-timetable and course-conflict rules."""

import pytest
from sqlalchemy import func, select

from kukey_core.core.exceptions import (
    ConflictError,
    CourseNotFoundError,
    DuplicateTimetableCourseError,
    MalformedPeriodError,
    ScheduleConflictError,
    TimetableAccessForbiddenError,
    TimetableNotFoundError,
    TimetableQuotaExceededError,
)
from kukey_core.models import Timetable, TimetableCourse
from kukey_core.services.timetable_service import TimetableService, default_table_name


@pytest.fixture()
def service(db_session):
    return TimetableService(db_session)


def _entry_count(db_session, timetable_id: int) -> int:
    return db_session.execute(
        select(func.count()).select_from(TimetableCourse).where(
            TimetableCourse.timetable_id == timetable_id
        )
    ).scalar_one()


def test_default_table_name() -> None:
    assert default_table_name("2024", "1", 2) == "2024-1(2)"


def test_first_timetable_is_main_and_numbered(service, user_factory) -> None:
    user = user_factory()
    first = service.create_timetable(user.id, "2024", "1")
    second = service.create_timetable(user.id, "2024", "1", "Plan B")

    assert (first.table_number, first.main_timetable, first.table_name) == (1, True, "2024-1(1)")
    assert (second.table_number, second.main_timetable, second.table_name) == (2, False, "Plan B")


def test_fourth_timetable_in_semester_is_rejected(service, user_factory, db_session) -> None:
    user = user_factory()
    for _ in range(3):
        service.create_timetable(user.id, "2024", "1")

    with pytest.raises(TimetableQuotaExceededError) as exc_info:
        service.create_timetable(user.id, "2024", "1")

    assert isinstance(exc_info.value, ConflictError)
    assert exc_info.value.status_code == 409
    assert len(service.list_timetables(user.id, "2024", "1")) == 3


def test_quota_is_per_semester(service, user_factory) -> None:
    user = user_factory()
    for _ in range(3):
        service.create_timetable(user.id, "2024", "1")

    other = service.create_timetable(user.id, "2024", "2")
    assert other.main_timetable is True
    assert other.table_number == 1


def test_deleted_slot_number_is_reused(service, user_factory) -> None:
    user = user_factory()
    tables = [service.create_timetable(user.id, "2024", "1") for _ in range(3)]
    service.delete_timetable(tables[1].id, user_id=user.id)

    replacement = service.create_timetable(user.id, "2024", "1")
    assert replacement.table_number == 2
    assert sorted(t.table_number for t in service.list_timetables(user.id, "2024", "1")) == [1, 2, 3]


def test_conflicting_course_is_rejected_without_mutation(
    service, user_factory, course_factory, db_session
) -> None:
    user = user_factory()
    timetable = service.create_timetable(user.id, "2024", "1")
    course_a = course_factory(("Mon", "1-3"))
    course_b = course_factory(("Mon", "3-4"))
    course_c = course_factory(("Tue", "1-3"))

    service.add_course(timetable.id, course_a.id, user_id=user.id)
    with pytest.raises(ScheduleConflictError):
        service.add_course(timetable.id, course_b.id, user_id=user.id)
    assert _entry_count(db_session, timetable.id) == 1

    service.add_course(timetable.id, course_c.id, user_id=user.id)
    assert [c.id for c in service.get_courses(timetable.id, user_id=user.id)] == [course_a.id, course_c.id]


def test_course_with_several_meetings_conflicts_on_any(
    service, user_factory, course_factory
) -> None:
    user = user_factory()
    timetable = service.create_timetable(user.id, "2024", "1")
    service.add_course(timetable.id, course_factory(("Mon", "1-2"), ("Wed", "5-6")).id, user_id=user.id)

    with pytest.raises(ScheduleConflictError):
        service.add_course(timetable.id, course_factory(("Thu", "1"), ("Wed", "6-7")).id, user_id=user.id)


def test_duplicate_course_is_rejected(service, user_factory, course_factory) -> None:
    user = user_factory()
    timetable = service.create_timetable(user.id, "2024", "1")
    course = course_factory(("Fri", "1"))
    service.add_course(timetable.id, course.id, user_id=user.id)

    with pytest.raises(DuplicateTimetableCourseError):
        service.add_course(timetable.id, course.id, user_id=user.id)


def test_add_course_unknown_ids(service, user_factory, course_factory) -> None:
    user = user_factory()
    timetable = service.create_timetable(user.id, "2024", "1")

    with pytest.raises(TimetableNotFoundError):
        service.add_course(99999, course_factory(("Mon", "1")).id, user_id=user.id)
    with pytest.raises(CourseNotFoundError):
        service.add_course(timetable.id, 99999, user_id=user.id)


def test_other_users_timetable_is_forbidden(service, user_factory, course_factory) -> None:
    owner = user_factory()
    intruder = user_factory()
    timetable = service.create_timetable(owner.id, "2024", "1")
    course = course_factory(("Mon", "1"))

    with pytest.raises(TimetableAccessForbiddenError):
        service.add_course(timetable.id, course.id, user_id=intruder.id)
    with pytest.raises(TimetableAccessForbiddenError):
        service.rename_timetable(timetable.id, "mine now", user_id=intruder.id)
    with pytest.raises(TimetableAccessForbiddenError):
        service.delete_timetable(timetable.id, user_id=intruder.id)
    with pytest.raises(TimetableAccessForbiddenError):
        service.remove_course(timetable.id, course.id, user_id=intruder.id)


def test_remove_course_is_idempotent(service, user_factory, course_factory, db_session) -> None:
    user = user_factory()
    timetable = service.create_timetable(user.id, "2024", "1")
    course = course_factory(("Mon", "1"))
    service.add_course(timetable.id, course.id, user_id=user.id)

    service.remove_course(timetable.id, course.id, user_id=user.id)
    service.remove_course(timetable.id, course.id, user_id=user.id)

    assert _entry_count(db_session, timetable.id) == 0


def test_set_main_moves_the_flag(service, user_factory) -> None:
    user = user_factory()
    first = service.create_timetable(user.id, "2024", "1")
    second = service.create_timetable(user.id, "2024", "1")

    service.set_main(second.id, user_id=user.id)

    flags = {t.id: t.main_timetable for t in service.list_timetables(user.id, "2024", "1")}
    assert flags == {first.id: False, second.id: True}
    assert service.get_main_timetable(user.id, "2024", "1").id == second.id


def test_set_main_leaves_other_semesters_alone(service, user_factory) -> None:
    user = user_factory()
    spring = service.create_timetable(user.id, "2024", "1")
    service.create_timetable(user.id, "2024", "2")
    fall_second = service.create_timetable(user.id, "2024", "2")

    service.set_main(fall_second.id, user_id=user.id)

    assert service.get_main_timetable(user.id, "2024", "1").id == spring.id


def test_deleting_main_does_not_promote(service, user_factory, course_factory, db_session) -> None:
    user = user_factory()
    main = service.create_timetable(user.id, "2024", "1")
    service.create_timetable(user.id, "2024", "1")
    service.add_course(main.id, course_factory(("Mon", "1")).id, user_id=user.id)
    main_id = main.id

    service.delete_timetable(main_id, user_id=user.id)

    assert db_session.get(Timetable, main_id) is None
    assert _entry_count(db_session, main_id) == 0
    with pytest.raises(TimetableNotFoundError):
        service.get_main_timetable(user.id, "2024", "1")


def test_rename_timetable(service, user_factory) -> None:
    user = user_factory()
    timetable = service.create_timetable(user.id, "2024", "1")
    renamed = service.rename_timetable(timetable.id, "Final", user_id=user.id)
    assert renamed.table_name == "Final"


def test_malformed_catalog_period_is_an_error(service, user_factory, course_factory, db_session) -> None:
    """A bad catalog row fails the add instead of counting as no conflict."""
    user = user_factory()
    timetable = service.create_timetable(user.id, "2024", "1")
    service.add_course(timetable.id, course_factory(("Mon", "1-2")).id, user_id=user.id)
    broken = course_factory(("Mon", "3-1"))

    with pytest.raises(MalformedPeriodError) as exc_info:
        service.add_course(timetable.id, broken.id, user_id=user.id)

    assert exc_info.value.status_code == 400
    assert _entry_count(db_session, timetable.id) == 1
