"""
Core module exports.
"""
from .enums import (
    StockLevel,
    TriggerSource,
    AlertType,
)

from .exceptions import (
    BaseServiceError,
    ConfigurationError,
    StoreUnavailableError,
    NotifierNotConfiguredError,
    NotFoundError,
    TenantNotFoundError,
    ProductNotFoundError,
    DispatchError,
)
