"""Tests for opening the database."""
import pytest
from sqlalchemy import inspect

from ..config import Config
from ..db.connector import build_database_url, engine_options, init_db
from ..db.session import SessionManager
from ..errors import ConfigError, DatabaseConnectionError

def test_build_database_url():
    """Test Turso URLs are translated for the libsql dialect."""
    assert build_database_url('libsql://bakery.turso.io', 'abc') == \
        'sqlite+libsql://bakery.turso.io/?authToken=abc&secure=true'
    assert build_database_url(' libsql://bakery.turso.io/ ', 'a+b/c=') == \
        'sqlite+libsql://bakery.turso.io/?authToken=a%2Bb%2Fc%3D&secure=true'
    assert build_database_url('libsql://bakery.turso.io') == 'sqlite+libsql://bakery.turso.io/?secure=true'

    # Other URLs are already SQLAlchemy URLs
    assert build_database_url('sqlite:///orders.db', 'abc') == 'sqlite:///orders.db'

def test_engine_options():
    config = Config(pool_size=10, pool_recycle=60)
    options = engine_options('sqlite+libsql://bakery.turso.io/?secure=true', config)
    assert options['pool_size'] == 10
    assert options['max_overflow'] == 0
    assert options['pool_recycle'] == 60

    assert engine_options('sqlite:///orders.db', config) == {'connect_args': {'check_same_thread': False}}

def test_init_db_requires_config():
    """Test a missing URL or token is reported before connecting."""
    with pytest.raises(ConfigError, match='database URL is missing'):
        init_db(Config(auth_token='token'))
    with pytest.raises(ConfigError, match='authentication token is missing'):
        init_db(Config(database_url='libsql://bakery.turso.io'))

def test_init_db_creates_schema(tmp_path):
    """Test the schema is created on first connect and left alone after."""
    config = Config(database_url=f"sqlite:///{tmp_path / 'orders.db'}", auth_token='token')

    manager = init_db(config)
    try:
        tables = set(inspect(manager.engine).get_table_names())
        assert {'products', 'representatives', 'orders', 'order_items'} <= tables
    finally:
        manager.dispose()

    # Second run finds the tables in place
    init_db(config).dispose()

def test_ping_failure(tmp_path):
    """Test unreachable databases raise DatabaseConnectionError."""
    manager = SessionManager(f"sqlite:///{tmp_path / 'missing' / 'orders.db'}")
    try:
        with pytest.raises(DatabaseConnectionError, match='error connecting to database'):
            manager.ping(timeout=5)
    finally:
        manager.dispose()

    config = Config(database_url=f"sqlite:///{tmp_path / 'missing' / 'orders.db'}", auth_token='token')
    with pytest.raises(DatabaseConnectionError):
        init_db(config)

def test_session_manager_commits_and_rolls_back(session_manager):
    """Test the context manager commits on success and rolls back on error."""
    from ..db.models import Product

    with session_manager as session:
        session.add(Product(name='Scones', price=5.0))

    with pytest.raises(RuntimeError):
        with session_manager as session:
            session.add(Product(name='Brownies', price=12.0))
            session.flush()
            raise RuntimeError("abort")

    with session_manager as session:
        assert [p.name for p in session.query(Product).all()] == ['Scones']

def test_ping_driver_failure(session_manager, monkeypatch):
    """Errors raised by the driver outside SQLAlchemy are reported the same way."""
    class RejectingEngine:
        def connect(self):
            raise RuntimeError("handshake rejected")

    monkeypatch.setattr(session_manager, 'engine', RejectingEngine())

    with pytest.raises(DatabaseConnectionError, match='handshake rejected'):
        session_manager.ping(timeout=5)
