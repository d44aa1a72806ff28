# stockwatch/models/product.py
from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.sql import func

from stockwatch.database import Base


class Product(Base):
    __tablename__ = "products"

    tenant_id = Column(String, ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True)
    id = Column(String, primary_key=True)

    name = Column(String, nullable=False, default="")
    quantity = Column(Float, nullable=False, default=0, index=True)
    sku = Column(String, nullable=True)
    expiry = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Product(tenant_id='{self.tenant_id}', id='{self.id}', quantity={self.quantity})>"
