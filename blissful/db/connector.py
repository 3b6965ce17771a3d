"""Open the order database from the saved configuration."""

import logging
from typing import Any, Dict
from urllib.parse import quote_plus

from ..config import Config
from ..errors import ConfigError, DatabaseConnectionError
from .session import SessionManager

logger = logging.getLogger(__name__)

LIBSQL_SCHEME = 'libsql://'


def build_database_url(database_url: str, auth_token: str = '') -> str:
    """Translate a Turso URL into a SQLAlchemy URL.

    libsql://host becomes sqlite+libsql://host/?authToken=...&secure=true.
    Any other URL is assumed to already be a SQLAlchemy URL and is returned
    unchanged.
    """
    url = database_url.strip()
    if not url.startswith(LIBSQL_SCHEME):
        return url

    host = url[len(LIBSQL_SCHEME):].rstrip('/')
    query = 'secure=true'
    if auth_token:
        query = f"authToken={quote_plus(auth_token)}&{query}"
    return f"sqlite+libsql://{host}/?{query}"


def engine_options(url: str, config: Config) -> Dict[str, Any]:
    """Pool settings for the engine behind url."""
    if url.startswith('sqlite+libsql://'):
        return {
            'pool_size': config.pool_size,
            'max_overflow': 0,
            'pool_recycle': config.pool_recycle,
            'connect_args': {'check_same_thread': False},
        }
    if url.startswith('sqlite'):
        return {'connect_args': {'check_same_thread': False}}
    return {
        'pool_size': config.pool_size,
        'max_overflow': 0,
        'pool_recycle': config.pool_recycle,
    }


def init_db(config: Config) -> SessionManager:
    """Open the database, verify it answers and ensure the schema exists.

    Args:
        config: Runtime configuration holding the connection details

    Returns:
        SessionManager: Manager bound to a pooled engine

    Raises:
        ConfigError: If the URL or token is missing
        DatabaseConnectionError: If the database cannot be reached
    """
    try:
        config.validate()
    except ConfigError as e:
        raise ConfigError(f"database configuration invalid: {e}") from e

    url = build_database_url(config.database_url, config.auth_token)
    try:
        manager = SessionManager(url, **engine_options(url, config))
    except Exception as e:
        raise DatabaseConnectionError(f"error preparing database connection: {e}") from e

    try:
        manager.ping(timeout=config.connect_timeout)
        manager.ensure_schema()
    except DatabaseConnectionError:
        manager.dispose()
        raise

    logger.info("Connected to database")
    return manager
