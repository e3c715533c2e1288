# src/kukey_core/models/__init__.py
"""SQLAlchemy models for the KU-KEY core."""

from .community import Comment, CommentAnonymousNumber, CommentLike, Post
from .course import Course, CourseDetail
from .point import AttendanceCheck, PointHistory
from .timetable import Timetable, TimetableCourse
from .user import Character, User

__all__ = [
    "Comment", "CommentAnonymousNumber", "CommentLike", "Post",
    "Course", "CourseDetail",
    "AttendanceCheck", "PointHistory",
    "Timetable", "TimetableCourse",
    "Character", "User",
]
