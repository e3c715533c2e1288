"""Database session configuration and transaction boundaries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from kukey_core.core.exceptions import PersistenceError
from kukey_core.core.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Session.info key marking an open unit of work.
_UNIT_OF_WORK_KEY = "kukey_unit_of_work"


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def configure_sqlite_engine(engine: Engine) -> Engine:
    """Make every SQLite transaction take the write lock up front.

    pysqlite defers BEGIN until the first DML statement, which lets two
    read-then-write transactions interleave. Emitting BEGIN IMMEDIATE
    serializes writers the way row locks do on a server database.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine for `url`, applying SQLite locking when relevant."""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", 30)
        engine = create_engine(url, connect_args=connect_args, **kwargs)
        return configure_sqlite_engine(engine)
    return create_engine(url, pool_pre_ping=True, **kwargs)


# Ensure model modules are imported so that metadata is populated when create_all runs.
import kukey_core.models  # noqa: E402,F401

engine = build_engine(settings.database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def in_unit_of_work(db: Session) -> bool:
    """Return True when `db` is inside an open unit of work."""
    return bool(db.info.get(_UNIT_OF_WORK_KEY))


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Run the enclosed block as one all-or-nothing transaction.

    Nested scopes join the outermost one; only the outermost scope commits.
    Any exception rolls the whole unit back before it propagates.
    """
    if in_unit_of_work(db):
        yield db
        return

    db.info[_UNIT_OF_WORK_KEY] = True
    try:
        yield db
        db.commit()
    except BaseException:
        db.rollback()
        raise
    finally:
        db.info.pop(_UNIT_OF_WORK_KEY, None)


def run_in_transaction(
    db: Session,
    fn: Callable[[Session], T],
    *,
    retries: int | None = None,
) -> T:
    """Execute `fn(db)` in a unit of work, retrying lost races.

    A unique-constraint violation or lock timeout means a concurrent writer
    won the race; the unit is rolled back and replayed from scratch so its
    reads observe the winner's rows. When called inside an existing unit of
    work the function simply joins it and no retry happens.
    """
    if in_unit_of_work(db):
        return fn(db)

    attempts = (settings.transaction_retries if retries is None else retries) + 1
    for attempt in range(1, attempts + 1):
        try:
            with unit_of_work(db):
                return fn(db)
        except (IntegrityError, OperationalError) as exc:
            if attempt == attempts:
                logger.error("Transaction failed after %d attempts: %s", attempt, exc)
                raise PersistenceError("Transaction could not be completed") from exc
            logger.warning("Transaction attempt %d lost a race, retrying: %s", attempt, exc)
    raise PersistenceError("Transaction could not be completed")  # pragma: no cover
