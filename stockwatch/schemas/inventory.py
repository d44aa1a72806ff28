"""
Typed records for the documents the notification core reads.

Store documents are loosely shaped, so everything is validated here, at the
boundary, and the rest of the pipeline only ever sees these records.
"""
from datetime import date, datetime, time, timezone
from typing import FrozenSet, Optional, Union

from pydantic import Field, field_validator

from stockwatch.schemas.base import BaseSchema


class ProductSnapshot(BaseSchema):
    """A product as seen at one point in time."""

    id: str = ""
    name: str = ""
    # Missing quantity reads as empty stock
    quantity: Union[int, float] = Field(default=0, ge=0)
    sku: Optional[str] = None
    expiry: Optional[datetime] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_blank(cls, value):
        return "" if value is None else value

    @field_validator("quantity", mode="before")
    @classmethod
    def _missing_quantity(cls, value):
        return 0 if value is None else value

    @field_validator("sku", mode="before")
    @classmethod
    def _blank_sku(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("expiry", mode="before")
    @classmethod
    def _expiry_datetime(cls, value):
        # A bare date expires at midnight
        if isinstance(value, str) and value and "T" not in value:
            value = date.fromisoformat(value)
        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        return value

    @field_validator("expiry")
    @classmethod
    def _expiry_utc(cls, value):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def display_sku(self) -> str:
        return self.sku or "N/A"


class SupplierRecord(BaseSchema):
    """A supplier and the products it watches."""

    id: str = ""
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    auto_email: bool = Field(default=False, alias="autoEmail")
    selected_products: FrozenSet[str] = Field(default_factory=frozenset, alias="selectedProducts")

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_blank(cls, value):
        return "" if value is None else value

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("auto_email", mode="before")
    @classmethod
    def _strict_opt_in(cls, value):
        # Only a real boolean true opts a supplier in
        return value is True

    @field_validator("selected_products", mode="before")
    @classmethod
    def _monitored_ids(cls, value):
        # Anything that is not a collection of ids monitors nothing
        if not isinstance(value, (list, tuple, set, frozenset)):
            return frozenset()
        return frozenset(item for item in value if isinstance(item, str))

    def monitors(self, product_id: str) -> bool:
        return product_id in self.selected_products
