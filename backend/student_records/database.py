"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` (a local SQLite file `students.db` by default)
and provides small helpers used by the application and tests.
"""

import logging

from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session, select

from .config import settings
from . import models

logger = logging.getLogger("student_records.database")

# Accounts the bundled login page advertises for quick sign-in.
DEFAULT_USERS = (
    ("admin", "admin123", models.Role.ADMIN),
    ("user", "user123", models.Role.USER),
)


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across FastAPI's worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    connect_args=_connect_args(settings.DATABASE_URL),
)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _register_sqlite_functions(dbapi_conn, connection_record):
        # SQLite's built-in lower() only folds ASCII; match Python's str.lower
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


def create_db_and_tables():
    """Create the `students` and `users` tables from SQLModel metadata.

    Existing tables are left untouched; there is no migration tooling.
    """
    SQLModel.metadata.create_all(engine)


def seed_default_users() -> int:
    """Insert the default accounts whose usernames are not taken yet.

    Returns the number of users created. Safe to call repeatedly.
    """
    created = 0
    with Session(engine) as session:
        for username, password, role in DEFAULT_USERS:
            stmt = select(models.User).where(models.User.username == username)
            if session.exec(stmt).first():
                continue
            session.add(models.User(username=username, password=password, role=role.value))
            created += 1
        session.commit()
    if created:
        logger.info("seeded %d default user(s)", created)
    return created


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
