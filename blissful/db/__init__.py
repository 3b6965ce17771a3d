"""Database access: models, sessions and connection setup."""

from .session import SessionManager
from .connector import build_database_url, init_db

__all__ = ['SessionManager', 'build_database_url', 'init_db']
