# tests/test_attendance.py
"""Tests for the daily attendance reward."""

from datetime import date

import pytest

from kukey_core.core.exceptions import AlreadyCheckedInError
from kukey_core.core.settings import settings
from kukey_core.services.attendance import AttendanceService
from kukey_core.services.point_ledger import PointLedger


def test_check_in_awards_points_once_per_day(db_session, user_factory) -> None:
    user = user_factory(point=5)
    service = AttendanceService(db_session)

    balance = service.check_in(user.id, today=date(2024, 3, 4))
    assert balance == 5 + settings.attendance_points

    with pytest.raises(AlreadyCheckedInError):
        service.check_in(user.id, today=date(2024, 3, 4))

    assert service.check_in(user.id, today=date(2024, 3, 5)) == 5 + 2 * settings.attendance_points
    histories = PointLedger(db_session).history(user.id)
    assert [h.history for h in histories] == ["Attendance check 2024-03-05", "Attendance check 2024-03-04"]
