# stockwatch/models/tenant.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from stockwatch.database import Base


class Tenant(Base):
    """An isolated customer account. Products and suppliers hang off it."""
    __tablename__ = "tenants"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Tenant(id='{self.id}')>"
