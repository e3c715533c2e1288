"""Unit tests for the ORM models defined in kukey_core.models.

These tests verify mapping details the services rely on: composite primary
keys, the constraints that back up the row-locking rules, and cascades.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from kukey_core.models import (
    CommentAnonymousNumber,
    CommentLike,
    Timetable,
    TimetableCourse,
    User,
)


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert User.__tablename__ == "user_account"
    assert Timetable.__tablename__ == "timetable"
    assert TimetableCourse.__tablename__ == "timetable_course"
    assert CommentAnonymousNumber.__tablename__ == "comment_anonymous_number"


def test_composite_primary_keys():
    assert {c.name for c in TimetableCourse.__table__.primary_key} == {"timetable_id", "course_id"}
    assert {c.name for c in CommentLike.__table__.primary_key} == {"comment_id", "user_id"}


def test_negative_balance_violates_check_constraint(db_session):
    """The balance floor holds even for writes that bypass the ledger."""
    db_session.add(User(username="broke", point=-1))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_duplicate_anonymous_number_is_rejected(db_session, user_factory, post_factory):
    author, first, second = user_factory(), user_factory(), user_factory()
    post = post_factory(author)
    db_session.add(CommentAnonymousNumber(post_id=post.id, user_id=first.id, anonymous_number=1))
    db_session.flush()

    db_session.add(CommentAnonymousNumber(post_id=post.id, user_id=second.id, anonymous_number=1))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_duplicate_slot_number_is_rejected(db_session, user_factory):
    user = user_factory()
    for name in ("a", "b"):
        db_session.add(
            Timetable(
                user_id=user.id,
                year="2024",
                semester="1",
                table_name=name,
                main_timetable=False,
                table_number=1,
            )
        )
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()
