"""Timetable-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TimetableCreate(BaseModel):
    """Schema for creating a timetable."""

    year: str = Field(..., min_length=4, max_length=4, description="Academic year, e.g. 2024")
    semester: str = Field(..., min_length=1, max_length=16, description="Semester label")
    table_name: str | None = Field(None, max_length=64, description="Defaults to 'year-semester(n)'")


class TimetableCourseRequest(BaseModel):
    """Schema for adding or removing a course in a timetable."""

    timetable_id: int
    course_id: int


class TimetableRename(BaseModel):
    table_name: str = Field(..., min_length=1, max_length=64)


class TimetableResponse(BaseModel):
    """Schema for timetable information returned by the API."""

    id: int
    user_id: int
    year: str
    semester: str
    table_name: str
    main_timetable: bool
    table_number: int

    model_config = ConfigDict(from_attributes=True)


class TimetableCourseResponse(BaseModel):
    timetable_id: int
    course_id: int

    model_config = ConfigDict(from_attributes=True)
