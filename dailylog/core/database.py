# dailylog/core/database.py

import os
import logging
import threading
from contextlib import contextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from dailylog.core.exceptions import StorageUnavailable

load_dotenv()
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# DATABASE URL
# ---------------------------------------------------

DEFAULT_DATABASE_URL = "sqlite:///./dailylog.db"


def normalize_database_url(url: str) -> str:
    """Convert old-style “postgres://” URIs to the scheme SQLAlchemy expects."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def get_database_url() -> str:
    return normalize_database_url(os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL)


Base = declarative_base()

# ---------------------------------------------------
# CONNECTION MANAGER
# ---------------------------------------------------

class ConnectionManager:
    """
    Owns the single engine used by the process.

    The engine is built lazily by the first call to ``connect()``. Callers
    that arrive while that first attempt is still running wait on the lock
    and then receive the same engine, so only one connection attempt is ever
    in flight. A failed attempt is not cached: the next call tries again.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = normalize_database_url(database_url or get_database_url())
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._engine is not None

    def _build_engine(self) -> Engine:
        if self.database_url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if self.database_url in ("sqlite://", "sqlite:///:memory:"):
                # every session must see the same in-memory database
                kwargs["poolclass"] = StaticPool
            return create_engine(self.database_url, **kwargs)

        return create_engine(
            self.database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    def connect(self) -> Engine:
        if self._engine is not None:
            return self._engine

        with self._lock:
            if self._engine is not None:
                return self._engine

            engine = None
            try:
                logger.info(f"🔄 Connecting to storage at {self._redacted_url()}")
                engine = self._build_engine()
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                # the logs collection is created on first use, there are no migrations
                from dailylog.db import models  # noqa: F401
                Base.metadata.create_all(bind=engine)
            except (SQLAlchemyError, ImportError) as e:
                # bad URL, missing driver or unreachable target
                if engine is not None:
                    engine.dispose()
                logger.error(f"❌ Storage connection failed: {e}")
                raise StorageUnavailable("Storage unavailable") from e

            self._session_factory = sessionmaker(
                autoflush=False,
                bind=engine,
            )
            self._engine = engine
            logger.info("✅ Storage connection established")
            return engine

    @contextmanager
    def session(self):
        """
        Context-manager for SQLAlchemy sessions.
        Use like:
            with manager.session() as db:
                ...
        """
        self.connect()
        db: Session = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                logger.info("Storage connection closed")
            self._engine = None
            self._session_factory = None

    def _redacted_url(self) -> str:
        return make_url(self.database_url).render_as_string(hide_password=True)


# ---------------------------------------------------
# FASTAPI DEPENDENCIES
# ---------------------------------------------------

connection_manager = ConnectionManager()


def get_connection_manager() -> ConnectionManager:
    """FastAPI dependency returning the process-wide connection manager."""
    return connection_manager


def get_db(manager: ConnectionManager = Depends(get_connection_manager)):
    """
    FastAPI dependency to yield a SQLAlchemy session.
    Use in your route functions as:
        def some_route(..., db: Session = Depends(get_db)):
            ...
    """
    with manager.session() as db:
        yield db
