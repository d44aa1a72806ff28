"""
Change-notification payloads delivered by the document store.

Each event carries the document as it was before the write and as it is
after it. ``before`` is missing on creation and ``after`` is missing on
deletion.
"""
from typing import Optional

from pydantic import Field, model_validator

from stockwatch.schemas.base import BaseSchema
from stockwatch.schemas.inventory import ProductSnapshot, SupplierRecord


class ProductWrittenEvent(BaseSchema):
    tenant_id: str = Field(alias="tenantId", min_length=1)
    product_id: str = Field(alias="productId", min_length=1)
    before: Optional[ProductSnapshot] = None
    after: Optional[ProductSnapshot] = None

    @model_validator(mode="after")
    def _stamp_ids(self):
        # Document bodies usually omit their own id
        if self.before is not None and not self.before.id:
            self.before = self.before.model_copy(update={"id": self.product_id})
        if self.after is not None and not self.after.id:
            self.after = self.after.model_copy(update={"id": self.product_id})
        return self

    @property
    def is_deletion(self) -> bool:
        return self.after is None


class SupplierWrittenEvent(BaseSchema):
    tenant_id: str = Field(alias="tenantId", min_length=1)
    supplier_id: str = Field(alias="supplierId", min_length=1)
    before: Optional[SupplierRecord] = None
    after: Optional[SupplierRecord] = None

    @model_validator(mode="after")
    def _stamp_ids(self):
        if self.before is not None and not self.before.id:
            self.before = self.before.model_copy(update={"id": self.supplier_id})
        if self.after is not None and not self.after.id:
            self.after = self.after.model_copy(update={"id": self.supplier_id})
        return self
