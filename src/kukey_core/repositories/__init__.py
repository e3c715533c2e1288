"""Repositories wrapping SQLAlchemy access per aggregate."""

from .comment_repo import CommentRepository
from .course_repo import CourseRepository
from .point_repo import PointHistoryRepository
from .timetable_repo import TimetableRepository
from .user_repo import UserRepository

__all__ = [
    "CommentRepository",
    "CourseRepository",
    "PointHistoryRepository",
    "TimetableRepository",
    "UserRepository",
]
