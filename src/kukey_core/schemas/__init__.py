# src/kukey_core/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse, CommentUpdate, LikeCommentResponse
from .common import ERROR_RESPONSES, ErrorResponse
from .point import (
    AttendanceResponse,
    PointHistoryResponse,
    PurchaseItemRequest,
    PurchaseItemResponse,
)
from .timetable import (
    TimetableCourseRequest,
    TimetableCourseResponse,
    TimetableCreate,
    TimetableRename,
    TimetableResponse,
)

__all__ = [
    "CommentCreate", "CommentResponse", "CommentUpdate", "LikeCommentResponse",
    "ERROR_RESPONSES", "ErrorResponse",
    "AttendanceResponse", "PointHistoryResponse", "PurchaseItemRequest", "PurchaseItemResponse",
    "TimetableCourseRequest", "TimetableCourseResponse", "TimetableCreate",
    "TimetableRename", "TimetableResponse",
]
