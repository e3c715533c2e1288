# src/kukey_core/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .timetable import router as timetable_router
from .users import router as users_router

__all__ = [
    "comments_router",
    "timetable_router",
    "users_router",
]
