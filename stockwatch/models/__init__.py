from .tenant import Tenant
from .product import Product
from .supplier import Supplier

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'Tenant',
    'Product',
    'Supplier',
]
