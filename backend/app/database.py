from __future__ import annotations

import logging
from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import settings
from app.utils.exceptions import StoreWriteError

logger = logging.getLogger(__name__)

MIGRATION_HINT = (
    "Check that the '{table}' table matches the current models. "
    "You likely need to run the schema migration."
)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    pool_pre_ping=True,
    echo=settings.debug,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, action: str, table: str) -> None:
    """Commit, turning driver errors into StoreWriteError.

    The session is rolled back; callers that already applied the change
    locally keep it and surface the error to the user instead.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store write failed: %s on %s", action, table)
        raise StoreWriteError(
            f"Failed to {action}: {e}", hint=MIGRATION_HINT.format(table=table)
        ) from e


def create_tables() -> None:
    """Create any missing tables. create_all never drops existing ones."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured (%d models registered)", len(Base.metadata.tables))


def get_session_factory() -> sessionmaker:
    """For handlers that open short sessions themselves, such as websockets."""
    return SessionLocal
