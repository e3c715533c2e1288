# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from kukey_core.core.security import create_access_token
from kukey_core.db.session import Base, build_engine
from kukey_core.db.session import get_db as app_get_session
from kukey_core.main import app as fastapi_app
from kukey_core.models import Character, Course, CourseDetail, Post, User

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)
_COURSE_CODE_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def user_factory(db_session: Session) -> Callable[..., User]:
    """Create committed users; pass `character_type` to give them a character."""

    def _create(
        point: int = 0,
        *,
        character_type: str | None = None,
        character_level: int = 0,
    ) -> User:
        user = User(username=f"user{next(_USERNAME_COUNTER)}", point=point)
        if character_type is not None:
            user.character = Character(type=character_type, level=character_level)
        db_session.add(user)
        db_session.commit()
        return user

    return _create


@pytest.fixture()
def course_factory(db_session: Session) -> Callable[..., Course]:
    """Create a catalog course meeting at the given (day, period) pairs."""

    def _create(*meetings: tuple[str, str], year: str = "2024", semester: str = "1") -> Course:
        code = next(_COURSE_CODE_COUNTER)
        course = Course(
            course_code=f"COSE{code:03d}",
            course_name=f"Course {code}",
            professor_name="Kim",
            credit=3,
            year=year,
            semester=semester,
        )
        course.details = [CourseDetail(day=day, period=period) for day, period in meetings]
        db_session.add(course)
        db_session.commit()
        return course

    return _create


@pytest.fixture()
def post_factory(db_session: Session) -> Callable[[User], Post]:
    def _create(author: User) -> Post:
        post = Post(user_id=author.id, title="Question", content="Anyone taking COSE101?")
        db_session.add(post)
        db_session.commit()
        return post

    return _create


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
