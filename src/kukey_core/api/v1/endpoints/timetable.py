# src/kukey_core/api/v1/endpoints/timetable.py
"""Timetable endpoints."""

from fastapi import APIRouter, Query, status

from kukey_core.schemas.common import ERROR_RESPONSES
from kukey_core.schemas.timetable import (
    TimetableCourseRequest,
    TimetableCourseResponse,
    TimetableCreate,
    TimetableRename,
    TimetableResponse,
)
from kukey_core.services.timetable_service import TimetableService

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/timetable", tags=["timetable"], responses=ERROR_RESPONSES)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimetableResponse)
async def create_timetable(
    body: TimetableCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> TimetableResponse:
    """Create the next timetable of a semester (at most three per semester)."""
    timetable = TimetableService(db).create_timetable(
        current_user.id, body.year, body.semester, body.table_name
    )
    return TimetableResponse.model_validate(timetable)


@router.post("/course", status_code=status.HTTP_201_CREATED, response_model=TimetableCourseResponse)
async def add_timetable_course(
    body: TimetableCourseRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> TimetableCourseResponse:
    """Add a course to a timetable after checking for schedule conflicts."""
    entry = TimetableService(db).add_course(body.timetable_id, body.course_id, user_id=current_user.id)
    return TimetableCourseResponse.model_validate(entry)


@router.delete("/course", status_code=status.HTTP_204_NO_CONTENT)
async def remove_timetable_course(
    body: TimetableCourseRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    """Remove a course from a timetable; removing an absent course succeeds."""
    TimetableService(db).remove_course(body.timetable_id, body.course_id, user_id=current_user.id)


@router.get("/main-timetable", response_model=TimetableResponse)
async def get_main_timetable(
    current_user: CurrentUserDep,
    db: SessionDep,
    year: str = Query(...),
    semester: str = Query(...),
) -> TimetableResponse:
    timetable = TimetableService(db).get_main_timetable(current_user.id, year, semester)
    return TimetableResponse.model_validate(timetable)


@router.get("/user", response_model=list[TimetableResponse])
async def list_user_timetables(
    current_user: CurrentUserDep,
    db: SessionDep,
    year: str = Query(...),
    semester: str = Query(...),
) -> list[TimetableResponse]:
    timetables = TimetableService(db).list_timetables(current_user.id, year, semester)
    return [TimetableResponse.model_validate(timetable) for timetable in timetables]


@router.patch("/name/{timetable_id}", response_model=TimetableResponse)
async def rename_timetable(
    timetable_id: int,
    body: TimetableRename,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> TimetableResponse:
    timetable = TimetableService(db).rename_timetable(
        timetable_id, body.table_name, user_id=current_user.id
    )
    return TimetableResponse.model_validate(timetable)


@router.patch("/{timetable_id}", response_model=TimetableResponse)
async def set_main_timetable(
    timetable_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> TimetableResponse:
    """Make this timetable the main one; the previous main loses the flag."""
    timetable = TimetableService(db).set_main(timetable_id, user_id=current_user.id)
    return TimetableResponse.model_validate(timetable)


@router.delete("/{timetable_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_timetable(
    timetable_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    TimetableService(db).delete_timetable(timetable_id, user_id=current_user.id)
