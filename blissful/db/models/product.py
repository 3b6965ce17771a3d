"""Product model definition."""

from sqlalchemy import Column, Integer, String, Float, Boolean
from sqlalchemy.sql import expression

from .base import Base

class Product(Base):
    """Catalog product; inactive products stay referenced by old orders."""

    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    active = Column(Boolean, nullable=False, default=True, server_default=expression.true())

    def __repr__(self):
        """Return string representation."""
        return f'<Product(id={self.id}, name="{self.name}", price={self.price})>'
