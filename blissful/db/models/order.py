"""Order model definition."""

from sqlalchemy import Column, Integer, String, DateTime, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base

class Order(Base):
    """Client order.

    total_price is the persisted sum of the items' line prices; it is
    recomputed on every insert or edit, never at read time.
    """

    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False)
    due_date = Column(DateTime)
    client_name = Column(String, nullable=False, default='')
    contact = Column(String, nullable=False, default='')
    needs_delivery = Column(Boolean, nullable=False, default=False)
    delivery_address = Column(String, nullable=False, default='')
    comment = Column(String, nullable=False, default='')
    completed = Column(Boolean, nullable=False, default=False)
    representative_id = Column(Integer, ForeignKey('representatives.id'))
    total_price = Column(Float, nullable=False, default=0.0)

    # Relationships
    representative = relationship("Representative")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id"
    )

    def __repr__(self):
        """Return string representation."""
        return f'<Order(id={self.id}, client="{self.client_name}", total={self.total_price})>'
