"""Base model with common fields for all database models"""

from sqlalchemy import Column, DateTime
from buildtrack.database import Base
from buildtrack.utils import utcnow


class BaseModel(Base):
    """Abstract base model with timestamp fields"""

    __abstract__ = True

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
