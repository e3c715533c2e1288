"""Typed domain errors for the KU-KEY core.

Every business-rule violation is raised as a subclass of `KukeyError`. The
API layer turns them into JSON responses; services never swallow them.

Kinds:
    NotFoundError              referenced entity is absent (404)
    ConflictError              quota, duplicate, overlap, price mismatch (409)
    ForbiddenError             ownership mismatch (403)
    InsufficientResourceError  not enough points (400)
    InvalidInputError          malformed period strings or item metadata (400)
    InternalError              a write affected no rows when one was expected (500)
"""

from __future__ import annotations

from typing import Any


class KukeyError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 500
    error_code: int = 9000
    default_message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, **details: Any) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "message": self.message,
            "error_code": self.error_code,
            "status_code": self.status_code,
        }


class NotFoundError(KukeyError):
    status_code = 404
    error_code = 9404
    default_message = "Requested resource does not exist"


class ConflictError(KukeyError):
    status_code = 409
    error_code = 9409
    default_message = "Request conflicts with current state"


class ForbiddenError(KukeyError):
    status_code = 403
    error_code = 9403
    default_message = "Access to this resource is forbidden"


class InsufficientResourceError(KukeyError):
    status_code = 400
    error_code = 9400
    default_message = "Not enough resources to complete the request"


class InvalidInputError(KukeyError):
    status_code = 400
    error_code = 9401
    default_message = "Invalid input"


class InternalError(KukeyError):
    status_code = 500
    error_code = 9500


# ============================================
# Users, points and characters (2xxx)
# ============================================

class UserNotFoundError(NotFoundError):
    error_code = 2000
    default_message = "User does not exist"


class InsufficientPointsError(InsufficientResourceError):
    error_code = 2100
    default_message = "Not enough points"


class PriceMismatchError(ConflictError):
    error_code = 2101
    default_message = "Stated price does not match the item price"


class ItemMetadataMissingError(InvalidInputError):
    error_code = 2102
    default_message = "Item metadata is missing"


class UnknownItemCategoryError(InvalidInputError):
    error_code = 2103
    default_message = "Unknown item category"


class InvalidItemMetadataError(InvalidInputError):
    error_code = 2104
    default_message = "Item metadata is invalid"


class CharacterNotFoundError(NotFoundError):
    error_code = 2200
    default_message = "Character does not exist"


class MaxLevelReachedError(ConflictError):
    error_code = 2201
    default_message = "Character is already at the maximum level"


class AlreadyCheckedInError(ConflictError):
    error_code = 2300
    default_message = "Attendance was already checked today"


# ============================================
# Courses and timetables (3xxx)
# ============================================

class CourseNotFoundError(NotFoundError):
    error_code = 3000
    default_message = "Course does not exist"


class MalformedPeriodError(InvalidInputError):
    error_code = 3001
    default_message = "Course period is malformed"


class TimetableNotFoundError(NotFoundError):
    error_code = 3200
    default_message = "Timetable does not exist"


class TimetableQuotaExceededError(ConflictError):
    error_code = 3201
    default_message = "Maximum number of timetables reached"


class DuplicateTimetableCourseError(ConflictError):
    error_code = 3202
    default_message = "Course already exists in timetable"


class ScheduleConflictError(ConflictError):
    error_code = 3203
    default_message = "Course conflicts with existing courses"


class TimetableAccessForbiddenError(ForbiddenError):
    error_code = 3204
    default_message = "Timetable belongs to another user"


# ============================================
# Community (4xxx)
# ============================================

class PostNotFoundError(NotFoundError):
    error_code = 4100
    default_message = "Post does not exist"


class CommentNotFoundError(NotFoundError):
    error_code = 4200
    default_message = "Comment does not exist"


class InvalidParentCommentError(InvalidInputError):
    error_code = 4201
    default_message = "Cannot reply to a comment of another post"


class CommentAccessForbiddenError(ForbiddenError):
    error_code = 4202
    default_message = "Comment belongs to another user"


class SelfLikeForbiddenError(ForbiddenError):
    error_code = 4203
    default_message = "Cannot like your own comment"


# ============================================
# Persistence (9xxx)
# ============================================

class PersistenceError(InternalError):
    error_code = 9501
    default_message = "Write affected no rows"
