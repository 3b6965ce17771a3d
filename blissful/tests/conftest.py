"""Shared test fixtures and utilities."""

from datetime import datetime
from typing import Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from ..config import ENV_AUTH_TOKEN, ENV_DATABASE_URL
from ..db.models import Base, Order, OrderItem, Product, Representative
from ..db.session import SessionManager
from ..processors import CatalogProcessor, OrderExporter, OrderProcessor

@pytest.fixture
def engine():
    """Create an in-memory database shared by every session of a test."""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_manager(engine):
    """Create a session manager for testing."""
    return SessionManager(engine=engine)

@pytest.fixture
def session(session_manager):
    """Create a test database session."""
    session = session_manager.get_session()
    yield session
    session.close()

@pytest.fixture
def catalog(session_manager):
    return CatalogProcessor(session_manager)

@pytest.fixture
def order_processor(session_manager):
    return OrderProcessor(session_manager)

@pytest.fixture
def exporter(session_manager):
    return OrderExporter(session_manager)

@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate the TURSO_* variables and the config directory."""
    monkeypatch.delenv(ENV_DATABASE_URL, raising=False)
    monkeypatch.delenv(ENV_AUTH_TOKEN, raising=False)
    monkeypatch.setenv('BLISSFUL_CONFIG_DIR', str(tmp_path / 'config'))
    return tmp_path

@pytest.fixture
def populated(catalog):
    """Create a small catalog: two active products, one inactive, two reps."""
    cake = catalog.add_product('Carrot Cake', '7.50')
    brownies = catalog.add_product('Brownies', '12.00')
    old = catalog.add_product('Lemon Tart', '9.00')
    catalog.deactivate_product(old.id)

    thandi = catalog.add_representative('Thandi')
    sipho = catalog.add_representative('Sipho')

    return {
        'cake': cake,
        'brownies': brownies,
        'old': old,
        'thandi': thandi,
        'sipho': sipho,
    }

def insert_order(session, client_name: str, created_at: datetime, items, completed: bool = False,
                 representative_id: Optional[int] = None, due_date: Optional[datetime] = None,
                 contact: str = '', comment: str = '') -> int:
    """Insert an order directly, bypassing the processor.

    Args:
        items: List of (product_id, quantity, line_price)

    Returns:
        ID of the new order
    """
    order = Order(
        created_at=created_at,
        due_date=due_date,
        client_name=client_name,
        contact=contact,
        representative_id=representative_id,
        needs_delivery=False,
        delivery_address='',
        comment=comment,
        completed=completed,
        total_price=sum(price for _, _, price in items),
    )
    session.add(order)
    session.flush()
    for product_id, quantity, price in items:
        session.add(OrderItem(order_id=order.id, product_id=product_id, quantity=quantity, price=price))
    session.commit()
    return order.id

def add_product(session, name: str, price: float, active: bool = True) -> int:
    product = Product(name=name, price=price, active=active)
    session.add(product)
    session.commit()
    return product.id

def add_representative(session, name: str, active: bool = True) -> int:
    rep = Representative(name=name, active=active)
    session.add(rep)
    session.commit()
    return rep.id
