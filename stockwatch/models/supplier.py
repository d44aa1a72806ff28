# stockwatch/models/supplier.py
from sqlalchemy import Column, String, Boolean, Text, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func

from stockwatch.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    tenant_id = Column(String, ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True)
    id = Column(String, primary_key=True)

    name = Column(String, nullable=False, default="")
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    # Only these two fields are read by the notification pipeline
    auto_email = Column(Boolean, nullable=False, default=False, index=True)
    selected_products = Column(JSON, nullable=True)  # list of product ids

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Supplier(tenant_id='{self.tenant_id}', id='{self.id}', auto_email={self.auto_email})>"
