"""Base processor for database operations."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.session import SessionManager
from ..errors import BlissfulError, TransactionError

class BaseProcessor:
    """Common plumbing for processors that read and write through a SessionManager."""

    def __init__(self, session_manager: SessionManager, debug: bool = False):
        """Initialize processor with session manager.

        Args:
            session_manager: Database session manager
            debug: Enable debug logging
        """
        self.session_manager = session_manager
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)

        if self.debug:
            self.logger.debug(f"Initialized {self.__class__.__name__}")

    @contextmanager
    def transaction(self, action: str) -> Iterator[Session]:
        """Run a block in one transaction.

        The block either commits as a whole or is rolled back. Database
        failures, including a failed commit, surface as TransactionError;
        application errors raised inside the block propagate unchanged.

        Args:
            action: Short description used in log and error messages
        """
        try:
            with self.session_manager as session:
                yield session
        except BlissfulError:
            self.logger.debug(f"Rolled back: {action}")
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error {action}: {e}")
            raise TransactionError(f"error {action}: {e}") from e

    @contextmanager
    def read_session(self) -> Iterator[Session]:
        """Session for read-only work; always closed, never committed."""
        session = self.session_manager.get_session()
        try:
            yield session
        finally:
            session.close()
