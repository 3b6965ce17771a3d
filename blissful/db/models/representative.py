"""Representative model definition."""

from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.sql import expression

from .base import Base

class Representative(Base):
    """Staff member credited with taking an order."""

    __tablename__ = 'representatives'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    active = Column(Boolean, nullable=False, default=True, server_default=expression.true())

    def __repr__(self):
        """Return string representation."""
        return f'<Representative(id={self.id}, name="{self.name}")>'
