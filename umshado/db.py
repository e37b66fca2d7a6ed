"""Database engine, session factory and the FastAPI ``get_db`` dependency."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from umshado.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(
    database_url: str,
    pool_size: int = 10,
    max_overflow: int = 20,
    application_name: Optional[str] = None,
) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    connect_args = {}
    if application_name and database_url.startswith("postgresql"):
        connect_args["application_name"] = application_name
    return create_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


class DatabaseManager:
    """Owns the engine and session factory for one process."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseManager":
        engine = build_engine(
            settings.database_url or "",
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            application_name=settings.app_name,
        )
        logger.info(
            "Database engine created for %s",
            engine.url.render_as_string(hide_password=True),
        )
        return cls(engine)

    def create_all(self) -> None:
        """Create tables for all imported models (tests and local development)."""
        import umshado.models  # noqa: F401  register mappers

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def db_session(self) -> Iterator[Session]:
        """Yield a session and always close it; roll back on error."""
        db = self.session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency yielding a session from the app's ``DatabaseManager``."""
    with request.app.state.db_manager.db_session() as db:
        yield db
