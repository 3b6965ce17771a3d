"""OrderItem model definition."""

from sqlalchemy import Column, Integer, Float, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base

class OrderItem(Base):
    """One product line of an order; price is unit price times quantity."""

    __tablename__ = 'order_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey('orders.id'), nullable=False)
    product_id = Column(Integer, ForeignKey('products.id'), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product")

    def __repr__(self):
        """Return string representation."""
        return f'<OrderItem(id={self.id}, order={self.order_id}, product={self.product_id}, qty={self.quantity})>'
