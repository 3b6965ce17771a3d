"""SQLAlchemy models for database tables."""

from .base import Base
from .product import Product
from .representative import Representative
from .order import Order
from .order_item import OrderItem

__all__ = [
    'Base',
    'Product',
    'Representative',
    'Order',
    'OrderItem'
]
