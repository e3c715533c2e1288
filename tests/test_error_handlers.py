# tests/test_error_handlers.py
"""Tests for the JSON error bodies rendered by the application handlers."""

import json

import pytest
from starlette.requests import Request

from kukey_core.core.exceptions import PersistenceError, ScheduleConflictError
from kukey_core.main import kukey_error_handler, unhandled_error_handler


def _request(path: str = "/api/v1/timetable/course") -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "scheme": "http",
            "server": ("test", 80),
            "path": path,
            "query_string": b"",
            "headers": [],
        }
    )


@pytest.mark.asyncio
async def test_domain_error_is_rendered_with_its_status() -> None:
    response = await kukey_error_handler(_request(), ScheduleConflictError())

    assert response.status_code == 409
    assert json.loads(response.body) == {
        "name": "ScheduleConflictError",
        "message": ScheduleConflictError.default_message,
        "error_code": 3203,
        "status_code": 409,
    }


@pytest.mark.asyncio
async def test_internal_domain_error_is_logged(caplog) -> None:
    """Errors at 500 and above are logged with the request path."""
    with caplog.at_level("ERROR", logger="kukey_core.main"):
        response = await kukey_error_handler(_request(), PersistenceError("Point update failed"))

    assert response.status_code == 500
    assert json.loads(response.body)["error_code"] == 9501
    assert "/api/v1/timetable/course" in caplog.text


@pytest.mark.asyncio
async def test_unhandled_error_hides_details(caplog) -> None:
    with caplog.at_level("ERROR", logger="kukey_core.main"):
        response = await unhandled_error_handler(_request("/api/v1/user/point-history"), RuntimeError("db exploded"))

    assert response.status_code == 500
    assert json.loads(response.body) == {
        "name": "RuntimeError",
        "message": "An internal error occurred",
        "error_code": 9999,
        "status_code": 500,
    }
    assert "Unhandled error" in caplog.text
