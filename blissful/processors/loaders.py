"""Read-only queries that materialize products, representatives and orders."""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.models import Order, OrderItem, Product, Representative
from ..errors import NotFoundError, QueryError
from .records import OrderItemRecord, OrderRecord, ProductRecord, RepresentativeRecord

logger = logging.getLogger(__name__)

def _fetch(session: Session, statement, what: str) -> list:
    try:
        return session.execute(statement).all()
    except SQLAlchemyError as e:
        logger.error(f"Error loading {what}: {e}")
        raise QueryError(f"error loading {what}: {e}") from e

def load_products(session: Session) -> List[ProductRecord]:
    """Active products ordered by name."""
    return _load_products(session, active_only=True)

def load_all_products(session: Session) -> List[ProductRecord]:
    """All products, including deactivated ones, ordered by name."""
    return _load_products(session, active_only=False)

def _load_products(session: Session, active_only: bool) -> List[ProductRecord]:
    statement = select(Product.id, Product.name, Product.price, Product.active)
    if active_only:
        statement = statement.where(Product.active.is_(True))
    statement = statement.order_by(Product.name, Product.id)

    return [
        ProductRecord(id=row.id, name=row.name, price=row.price, active=bool(row.active))
        for row in _fetch(session, statement, 'products')
    ]

def load_representatives(session: Session) -> List[RepresentativeRecord]:
    """Active representatives ordered by name."""
    return _load_representatives(session, active_only=True)

def load_all_representatives(session: Session) -> List[RepresentativeRecord]:
    """All representatives, including deactivated ones, ordered by name."""
    return _load_representatives(session, active_only=False)

def _load_representatives(session: Session, active_only: bool) -> List[RepresentativeRecord]:
    statement = select(Representative.id, Representative.name, Representative.active)
    if active_only:
        statement = statement.where(Representative.active.is_(True))
    statement = statement.order_by(Representative.name, Representative.id)

    return [
        RepresentativeRecord(id=row.id, name=row.name, active=bool(row.active))
        for row in _fetch(session, statement, 'representatives')
    ]

def _order_statement():
    return (
        select(
            Order.id,
            Order.created_at,
            Order.due_date,
            Order.client_name,
            Order.contact,
            Order.representative_id,
            Representative.name.label('representative_name'),
            Order.needs_delivery,
            Order.delivery_address,
            Order.comment,
            Order.completed,
            Order.total_price,
        )
        .outerjoin(Representative, Order.representative_id == Representative.id)
    )

def _load_items(session: Session, order_id: int) -> List[OrderItemRecord]:
    statement = (
        select(
            OrderItem.id,
            OrderItem.product_id,
            Product.name.label('product_name'),
            OrderItem.quantity,
            OrderItem.price,
        )
        .join(Product, OrderItem.product_id == Product.id)
        .where(OrderItem.order_id == order_id)
        .order_by(OrderItem.id)
    )
    return [
        OrderItemRecord(
            id=row.id,
            product_id=row.product_id,
            product_name=row.product_name,
            quantity=row.quantity,
            price=row.price,
        )
        for row in _fetch(session, statement, f'items for order {order_id}')
    ]

def _to_order_record(session: Session, row) -> OrderRecord:
    return OrderRecord(
        id=row.id,
        created_at=row.created_at,
        due_date=row.due_date,
        client_name=row.client_name or '',
        contact=row.contact or '',
        representative_id=row.representative_id,
        representative_name=row.representative_name or '',
        needs_delivery=bool(row.needs_delivery),
        delivery_address=row.delivery_address or '',
        comment=row.comment or '',
        completed=bool(row.completed),
        total_price=row.total_price or 0.0,
        items=_load_items(session, row.id),
    )

def load_orders(session: Session) -> List[OrderRecord]:
    """Open orders, newest first, each with its line items.

    Items are fetched with one query per order.
    """
    statement = (
        _order_statement()
        .where(Order.completed.is_(False))
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    orders = [_to_order_record(session, row) for row in _fetch(session, statement, 'orders')]
    logger.debug(f"Loaded {len(orders)} open orders")
    return orders

def get_order(session: Session, order_id: int) -> OrderRecord:
    """Load one order, completed or not, with its line items."""
    statement = _order_statement().where(Order.id == order_id)
    rows = _fetch(session, statement, f'order {order_id}')
    if not rows:
        raise NotFoundError(f"Order {order_id} not found")
    return _to_order_record(session, rows[0])
