from .base import BaseSchema
from .inventory import ProductSnapshot, SupplierRecord
from .events import ProductWrittenEvent, SupplierWrittenEvent
