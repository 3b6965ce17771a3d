"""Database session management."""
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from ..errors import DatabaseConnectionError
from .models import Base

class SessionManager:
    """Manages database sessions."""

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None, **engine_kwargs):
        """Initialize session manager with database URL or an existing engine."""
        if engine is None:
            if not database_url:
                raise ValueError("database_url or engine is required")
            engine = create_engine(database_url, **engine_kwargs)
        self.engine = engine
        self.SessionLocal = sessionmaker(
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)
        self._sessions: List[Session] = []

    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session

    def __enter__(self) -> Session:
        """Context manager entry."""
        session = self.get_session()
        self._sessions.append(session)
        self.logger.debug(f"Entering context with session: {id(session)}")
        return session

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        session = self._sessions.pop()
        self.logger.debug(f"Exiting context with session: {id(session)}")
        try:
            if exc_type is None:
                self.logger.debug("Committing session")
                session.commit()
            else:
                self.logger.debug("Rolling back session")
                session.rollback()
        finally:
            self.logger.debug("Closing session")
            session.close()

    def ensure_schema(self) -> None:
        """Create any missing tables."""
        try:
            Base.metadata.create_all(self.engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"error creating schema: {e}") from e
        self.logger.debug("Schema ensured")

    def ping(self, timeout: Optional[float] = None) -> None:
        """Check the database answers a trivial query.

        Args:
            timeout: Seconds to wait before giving up

        Raises:
            DatabaseConnectionError: If the query fails or times out
        """
        def _select_one():
            with self.engine.connect() as connection:
                return connection.execute(text("SELECT 1")).scalar()

        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(_select_one)
            future.result(timeout=timeout)
        except FutureTimeout:
            raise DatabaseConnectionError(f"error connecting to database: no answer after {timeout}s")
        except Exception as e:
            # Driver errors outside the SQLAlchemy hierarchy included
            raise DatabaseConnectionError(f"error connecting to database: {e}") from e
        finally:
            executor.shutdown(wait=False)
        self.logger.debug("Database ping succeeded")

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.logger.debug("Disposing engine")
        self.engine.dispose()
