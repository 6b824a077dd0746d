# working_calendar/database.py
"""Database engine and session factory using SQLModel."""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from working_calendar import config
from working_calendar.errors import InternalError

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    # FastAPI serves sync endpoints from a thread pool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.SQL_ECHO,
    connect_args=_connect_args(config.DATABASE_URL),
)


def create_db_and_tables() -> None:
    """Create all tables and indexes from SQLModel metadata."""
    import working_calendar.models  # noqa: F401

    logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
    SQLModel.metadata.create_all(engine)


def get_session():
    """Yield a database session for FastAPI dependency injection."""
    with Session(engine) as session:
        yield session


@contextmanager
def persistence_errors(session: Session, action: str):
    """Roll back and re-raise storage failures as ``InternalError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise InternalError(f"Failed to {action}") from exc
