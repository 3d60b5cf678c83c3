"""SQLModel engine and transaction management.

This module provides:
- Database: an explicitly constructed owner of the engine and its pool
- Transactional session scopes that commit or roll back as one unit
- Table creation/teardown for development and tests

PostgreSQL is the primary database. SQLite URLs are accepted for local
development and tests.
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, text

from copydesk import config
from copydesk.exceptions import StorageError
from copydesk.logging import get_logger

logger = get_logger(__name__)


def _engine_kwargs(database_url: str) -> dict[str, Any]:
    """Pool settings for the given backend."""
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live inside one connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    # pool_pre_ping ensures connections are valid before use
    return {
        "pool_pre_ping": True,
        "pool_size": config.DB_POOL_SIZE,
        "max_overflow": config.DB_MAX_OVERFLOW,
        "pool_timeout": config.DB_POOL_TIMEOUT,
    }


class Database:
    """Engine, pool and session factory for one database.

    Usage:
        db = Database("sqlite://")
        db.create_all()
        with db.transaction() as session:
            session.add(project)
        db.dispose()
    """

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        self.url = database_url or config.DATABASE_URL
        self.engine = create_engine(self.url, echo=echo, **_engine_kwargs(self.url))

    def create_all(self) -> None:
        """Create all tables.

        Should only be used for development/testing; production schemas
        evolve additively through migrations.
        """
        # Import all models to ensure they're registered with SQLModel
        from copydesk.db import models  # noqa: F401

        SQLModel.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        """Drop all tables. USE WITH CAUTION - data loss will occur."""
        SQLModel.metadata.drop_all(self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()

    def ping(self) -> bool:
        """Check database connectivity."""
        try:
            with Session(self.engine) as session:
                session.exec(text("SELECT 1")).fetchone()
            return True
        except SQLAlchemyError as exc:
            logger.warning("database_ping_failed", error=str(exc))
            return False

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get a session for reads.

        Rolls back on any exception; storage failures surface as StorageError.
        """
        with Session(self.engine) as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("storage_error", error=str(exc))
                raise StorageError(details={"reason": exc.__class__.__name__}) from exc
            except BaseException:
                session.rollback()
                raise

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """Get a session whose work commits as one unit.

        Everything done inside the block is committed when it exits
        normally. Any exception, including cancellation, rolls the whole
        unit back so no partial mutation stays visible.

        Usage:
            with db.transaction() as session:
                recorder.snapshot(session, entry, user_id)
                entry.title = "New title"
        """
        with self.session() as session:
            with session.begin():
                yield session
